"""Console messaging client: one conversation fed from stdin."""

import asyncio
import uuid

from hybrd import IncomingMessage, InboundMessage, Reaction, Reply, Sender


class ConsoleConversation:
    def __init__(self, id: str = "console"):
        self.id = id

    @property
    def is_group(self) -> bool:
        return False

    async def send(self, content, content_type=None, metadata=None):
        if isinstance(content, Reaction):
            print(f"  [{content.content} on {content.reference}]")
        elif isinstance(content, Reply):
            print(f"  ↳ {content.content}")
        else:
            print(f"agent> {content}")


class ConsoleClient:
    inbox_id = "agent"

    def __init__(self):
        self.conversation = ConsoleConversation()

    async def get_conversation(self, conversation_id: str):
        if conversation_id == self.conversation.id:
            return self.conversation
        return None

    async def stream(self):
        while True:
            line = await asyncio.to_thread(input, "you> ")
            if not line.strip():
                continue
            message = InboundMessage(
                id=f"msg-{uuid.uuid4().hex[:6]}",
                conversation_id=self.conversation.id,
                content=line,
                sender_inbox_id="console-user",
            )
            yield IncomingMessage(
                conversation=self.conversation,
                message=message,
                sender=Sender(inbox_id="console-user", name="you"),
            )
