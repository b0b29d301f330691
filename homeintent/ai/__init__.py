"""
AI Module - turns raw instructions into structured intents.

Module Structure:
================
- providers/: LLM clients (Ollama, Gemini)
- prompts/: Prompt templates
- intent/: Intent schema and extraction
"""
