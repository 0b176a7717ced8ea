"""
CLI entrypoint, composition root and slash commands.
"""
