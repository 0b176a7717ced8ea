"""
Notifications.

Components:
- center.py: session-scoped notification state (refresh / acknowledge)
- alerts.py: polling sweep that delivers task alerts whose moment has passed
"""
