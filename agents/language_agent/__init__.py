# Language Agent Package
"""
Language Agent for the voice stock assistant.

Uses Google's Gemini models to pull ticker symbols out of a spoken query and to
write the per-symbol analysis from search snippets, with Jinja2 prompt templates
under ``prompts/``.
"""
