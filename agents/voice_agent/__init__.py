# Voice Agent Package
"""
Voice Agent for the voice stock assistant.

Turns an uploaded recording into the text of the spoken stock query using a
multimodal Gemini model.
"""
