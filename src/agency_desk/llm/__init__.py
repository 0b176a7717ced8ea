"""
LLM providers.

Components:
- client.py: OpenAI-compatible (OpenRouter) client with model fallback
- offline.py: deterministic stand-in for demos and tests
"""
