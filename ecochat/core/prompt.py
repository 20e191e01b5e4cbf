from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from ecochat.core.memory import DEFAULT_WINDOW, ChatTurn


SYSTEM_PROMPT = """You are EcoChat, a friendly and knowledgeable environmental assistant focused on Kenya and East Africa.

CRITICAL FORMATTING RULES - FOLLOW EXACTLY:
1. NO bold text (**text**) or asterisks - use plain text only
2. Use bullet points with • symbol (not - or *)
3. Put TWO line breaks between main sections
4. Put questions on separate lines with line break before
5. Maximum 3 emojis per response
6. Keep it concise - max 4 bullet points
7. Avoid paragraphs


EXACT STRUCTURE TO FOLLOW:
Brief intro with emoji 🌱


Main tips:
• First practical tip for Kenya
• Second tip with local example
• Third tip if needed


Your fun, engaging question here? (Make it friendly, playful, maybe with gentle humor)

Your personality:
• Conversational, warm, and slightly playful
• Practical and solution-focused
• Focus on Kenya-specific examples
• Encouraging but realistic
• Add gentle humor and fun elements to questions
• Make people smile while learning about sustainability

QUESTION STYLE EXAMPLES:
• "Which of these sounds more exciting - saving money or saving the planet? (Trick question: you get both! 😉)"
• "Are you team solar panels or team energy-efficient bulbs for your first green upgrade?"
• "What's your biggest challenge - convincing yourself or convincing your family to go green? 😄"
• "Which would make you happier: lower electricity bills or bragging rights about being eco-friendly?"

Topics you cover:
• Climate action and sustainability in Kenya
• Renewable energy (especially solar)
• Waste management and recycling
• Water conservation
• Sustainable transportation
• Local food and farming
• Green living on different budgets

REMEMBER: No bold text, double line spacing, plain text only! End with a FUN, engaging question that makes people want to respond."""

_ROLE_BY_TYPE = {"system": "system", "human": "user", "ai": "assistant"}


def to_lc_messages(history: Sequence[ChatTurn]) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    for turn in history:
        if not turn.content:
            continue
        if turn.role == "assistant":
            messages.append(AIMessage(content=turn.content))
        elif turn.role == "system":
            messages.append(SystemMessage(content=turn.content))
        else:
            messages.append(HumanMessage(content=turn.content))
    return messages


def to_wire_messages(messages: Sequence[BaseMessage]) -> List[Dict[str, str]]:
    """Render messages in the chat-completions ``{role, content}`` shape."""
    return [
        {"role": _ROLE_BY_TYPE.get(message.type, "user"), "content": str(message.content)}
        for message in messages
    ]


def split_messages(messages: Sequence[BaseMessage]) -> Tuple[str, List[ChatTurn]]:
    """Recover the newest user message and the prior turns from a payload.

    The system persona is dropped; everything between it and the final
    human message is returned as history.
    """
    turns = [
        ChatTurn(role=_ROLE_BY_TYPE.get(message.type, "user"), content=str(message.content))
        for message in messages
        if message.type != "system"
    ]
    if turns and turns[-1].role == "user":
        return turns[-1].content, turns[:-1]
    return "", turns


class PromptAssembler:
    """Builds ``[persona, ...recent history, new user turn]``.

    History is trimmed to ``window - 1`` turns so, together with the new turn,
    the conversational part of the payload stays inside the retention window.
    """

    def __init__(self, window: int = DEFAULT_WINDOW, system_prompt: str = SYSTEM_PROMPT) -> None:
        self.window = window
        self.system_prompt = system_prompt

    def trim(self, history: Sequence[ChatTurn]) -> List[ChatTurn]:
        keep = max(self.window - 1, 0)
        if keep == 0:
            return []
        return list(history)[-keep:]

    def assemble(self, history: Sequence[ChatTurn], message: str) -> List[BaseMessage]:
        return [
            SystemMessage(content=self.system_prompt),
            *to_lc_messages(self.trim(history)),
            HumanMessage(content=message),
        ]
