# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-19
# Description: PromptTemplates.py
# -----------------------------------------------------------------------------
"""
System/user prompt pairs for answer synthesis, keyed by QueryType.
"""
from dataclasses import dataclass
from typing import Dict

from receipt.types import QueryType

BASE_SYSTEM_PROMPT = (
    "You are a helpful assistant that answers questions about receipt data. You should:\n"
    "- Only use the receipt data provided to answer questions\n"
    "- Be concise and accurate\n"
    "- If you can't answer based on the provided data, say so\n"
    "- Format monetary amounts clearly (e.g., $123.45)\n"
    "- Use bullet points or tables when appropriate"
)

BASE_USER_PROMPT = 'User query: "{query}"\n\nReceipt data:\n{context}'


@dataclass(frozen=True)
class PromptTemplate:
    system_suffix: str
    user_instruction: str

    def system_prompt(self) -> str:
        return f"{BASE_SYSTEM_PROMPT}\n{self.system_suffix}"

    def user_prompt(self, query: str, context: str) -> str:
        base = BASE_USER_PROMPT.format(query=query, context=context)
        return f"{base}\n\n{self.user_instruction}"


TEMPLATES: Dict[QueryType, PromptTemplate] = {
    QueryType.AGGREGATE_SUMMARY: PromptTemplate(
        system_suffix=(
            "- Focus on providing numerical summaries and calculations\n"
            "- Group similar items when relevant\n"
            "- Highlight key insights about spending patterns"
        ),
        user_instruction=(
            "Please provide a summary answer to the user's query, "
            "including relevant calculations and insights."
        ),
    ),
    QueryType.OPEN_QUESTION: PromptTemplate(
        system_suffix=(
            "- Answer the specific question asked\n"
            "- Provide context from the receipts when helpful\n"
            "- Be conversational but informative"
        ),
        user_instruction="Please answer the user's question based on the receipt data provided.",
    ),
    QueryType.LEXICAL_SEARCH: PromptTemplate(
        system_suffix=(
            "- Summarize the relevant receipts found\n"
            "- Highlight key details that match the search query"
        ),
        user_instruction=(
            "Please provide a helpful summary of the receipts that match "
            "the user's search query."
        ),
    ),
}


def template_for(query_type: QueryType) -> PromptTemplate:
    return TEMPLATES.get(query_type, TEMPLATES[QueryType.LEXICAL_SEARCH])
