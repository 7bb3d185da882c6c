"""
Conversation prompt templates.

Defines the system prompt and the grounded user turn sent to the
generation service.

Dependencies: None
System role: Prompt templates for the conversation orchestrator
"""

SYSTEM_PROMPT = """You are a helpful AI assistant with access to a knowledge base of code repositories and documentation. Your role is to:

1. Answer questions based on the provided context from the knowledge base
2. Be accurate and cite specific sources when available
3. If the context doesn't contain relevant information, say so clearly
4. Format code snippets properly using markdown
5. Be concise but thorough in your explanations

When answering:
- Reference specific files or functions when mentioning code
- Explain concepts clearly for developers
- If you're uncertain, indicate the level of confidence
- Don't make up information not present in the context"""

FALLBACK_ANSWER = "I couldn't generate a response."

USER_TURN_TEMPLATE = """Context from knowledge base:
{context}

---

User question: {question}

Please answer based on the context provided above. If the context doesn't contain relevant information to answer the question, let the user know."""


def build_user_turn(context: str, question: str) -> str:
    """
    Build the final user turn carrying the grounding context.

    Args:
        context: Assembled context block (or the no-documents sentinel)
        question: The user's question, verbatim

    Returns:
        str: Prompt text for the last user message
    """
    return USER_TURN_TEMPLATE.format(context=context, question=question)
