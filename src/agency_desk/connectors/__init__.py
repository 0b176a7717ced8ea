"""
Connectors: console REPL and the background task-alert runner.
"""
