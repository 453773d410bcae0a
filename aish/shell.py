from __future__ import annotations

import logging
import sys
from typing import Iterator, List, Optional, TextIO

from .audit import build_log_entry, record_command, record_output
from .config import SessionConfig
from .openai_client import CompletionClient, CompletionError
from .output import iter_lines, join_lines, strip_sentinel
from .prompt import build_initial_prompt, build_system_prompt
from .store import Conversation

logger = logging.getLogger(__name__)

GUARD_RESPONSE = "bash: command not found"

INJECTION_TRIGGERS = (
  "ignore previous",
  "system prompt",
  "developer message",
  "you are an ai",
  "reveal your instructions",
  "jailbreak",
)


def is_prompt_injection(command: str) -> bool:
  lowered = command.lower()
  return any(trigger in lowered for trigger in INJECTION_TRIGGERS)


class AiShell:
  """A fake shell session whose output is generated by a chat model."""

  def __init__(
    self,
    config: SessionConfig,
    client: CompletionClient,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
  ) -> None:
    self._config = config
    self._client = client
    self._stdin = stdin if stdin is not None else sys.stdin
    self._stdout = stdout if stdout is not None else sys.stdout
    self._stderr = stderr if stderr is not None else sys.stderr
    self.conversation = Conversation(
      build_system_prompt(config.os_name, config.username, config.hostname)
    )
    self.prompt = build_initial_prompt(config.username, config.hostname)

  def _write(self, text: str) -> None:
    self._stdout.write(text)
    self._stdout.flush()

  def _audit(self, command: str, mode: str) -> None:
    record_command(
      build_log_entry(
        username=self._config.username,
        hostname=self._config.hostname,
        command=command,
        mode=mode,
      )
    )

  def _guarded(self, command: str) -> bool:
    if not self._config.guard or not is_prompt_injection(command):
      return False
    self._audit(command, "guard")
    return True

  def execute(self, command: str) -> Iterator[str]:
    """Send one command and yield the simulated output line by line."""
    if self._guarded(command):
      yield GUARD_RESPONSE
      return

    self._audit(command, "stream")
    self.conversation.add_user(command)
    lines: List[str] = []
    for line in iter_lines(self._client.stream(self.conversation.messages())):
      lines.append(line)
      yield line
    output = join_lines(lines)
    self.conversation.add_assistant(output)
    record_output(output)

  def run_command(self, command: str) -> str:
    """Send one command and return the whole simulated output."""
    if self._guarded(command):
      return GUARD_RESPONSE

    self._audit(command, "sync")
    self.conversation.add_user(command)
    output = strip_sentinel(self._client.complete(self.conversation.messages()))
    self.conversation.add_assistant(output)
    record_output(output)
    return output

  def _fail(self, exc: Exception) -> int:
    logger.error("Session end: %s", exc)
    self._stderr.write(f"aish: {exc}\n")
    self._stderr.flush()
    return 1

  def run_one_shot(self, command: str) -> int:
    try:
      output = self.run_command(command)
    except CompletionError as exc:
      return self._fail(exc)
    except KeyboardInterrupt:
      logger.info("Session end: interrupted")
      return 130
    if output:
      self._write(output + "\n")
    return 0

  def run_interactive(self) -> int:
    # An interrupt abandons whatever is in flight, including a pending request.
    try:
      while True:
        self._write(f"{self.prompt} ")
        try:
          line = self._stdin.readline()
        except (OSError, UnicodeDecodeError) as exc:
          return self._fail(exc)
        if not line:
          logger.info("Session end: end of input")
          self._write("\n")
          return 0
        command = line.rstrip("\r\n")
        if not command.strip():
          continue
        for output_line in self.execute(command):
          self._write(output_line + "\n")
    except CompletionError as exc:
      return self._fail(exc)
    except KeyboardInterrupt:
      logger.info("Session end: interrupt")
      self._write("\nlogout\n")
      return 0

  def run(self) -> int:
    if self._config.command:
      return self.run_one_shot(self._config.command)
    return self.run_interactive()
