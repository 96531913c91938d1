"""
Conversational RAG prompts.

Two prompts: one turns (history, follow-up) into a standalone search
query, the other answers from retrieved context. Chat history is spliced
in as real role-tagged messages, not flattened text.

Dependencies: langchain_core.prompts
System role: Prompt templates for the conversational RAG chain
"""

from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

REPHRASE_INSTRUCTION = (
    "Given the above conversation, generate a search query to look up in order "
    "to get information relevant to the conversation"
)

ANSWER_SYSTEM_PROMPT = """Answer the user's questions based on the below context:

{context}"""

CONTEXT_SEPARATOR = "\n\n"

REPHRASE_PROMPT = ChatPromptTemplate.from_messages([
    MessagesPlaceholder("chat_history"),
    ("human", "{input}"),
    ("human", REPHRASE_INSTRUCTION),
])

ANSWER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ANSWER_SYSTEM_PROMPT),
    MessagesPlaceholder("chat_history"),
    ("human", "{input}"),
])
