"""
Core wiring: ports (Protocols), application state, session, action results.
"""
