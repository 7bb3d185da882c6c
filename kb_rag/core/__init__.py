"""Core pipeline logic: chunking, embedding, context assembly and prompts."""
