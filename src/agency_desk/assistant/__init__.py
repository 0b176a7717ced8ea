"""
Chat assistant.

Components:
- persona.py: system prompt + fallback reply
- tools.py: function-calling tools over tasks and clients
- chat.py: tool-calling chat loop
- conversations.py: saving chat transcripts
"""
