"""Polish Muse: Gemini-backed nail polish palette curator."""
