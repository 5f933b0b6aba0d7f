"""Core SPC analysis: configuration, logging, input records, and the engine."""
