"""
Calendar integration.

Components:
- events.py: task reminder event payload + result-shaped action
- google.py: Google Calendar events.insert over httpx
"""
