from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

ROLES = ("system", "user", "assistant")


@dataclass
class Message:
  role: str
  content: str


class Conversation:
  """Ordered message history sent in full with every completion request."""

  def __init__(self, system_prompt: str) -> None:
    self._history: List[Message] = [Message(role="system", content=system_prompt)]

  def append(self, role: str, content: str) -> None:
    if role not in ROLES:
      raise ValueError(f"unknown message role: {role!r}")
    self._history.append(Message(role=role, content=content))

  def add_user(self, content: str) -> None:
    self.append("user", content)

  def add_assistant(self, content: str) -> None:
    self.append("assistant", content)

  def history(self) -> List[Message]:
    return list(self._history)

  def messages(self) -> List[Dict[str, str]]:
    return [{"role": entry.role, "content": entry.content} for entry in self._history]

  def __len__(self) -> int:
    return len(self._history)
