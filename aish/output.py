from __future__ import annotations

from typing import Iterable, Iterator, List

from .prompt import SENTINEL


def _is_sentinel(line: str, sentinel: str) -> bool:
  return line.strip() == sentinel


def iter_lines(chunks: Iterable[str], sentinel: str = SENTINEL) -> Iterator[str]:
  """Reassemble streamed text chunks into lines.

  Completed lines are yielded as soon as their newline arrives. The sentinel
  line ends the output: it and anything after it are dropped and the chunk
  source is closed so the rest of the response is not read.
  """
  buffer = ""
  source = iter(chunks)
  try:
    for chunk in source:
      buffer += chunk
      while "\n" in buffer:
        line, buffer = buffer.split("\n", 1)
        line = line.rstrip("\r")
        if _is_sentinel(line, sentinel):
          return
        yield line
    if buffer and not _is_sentinel(buffer, sentinel):
      yield buffer.rstrip("\r")
  finally:
    close = getattr(source, "close", None)
    if close is not None:
      close()


def strip_sentinel(text: str, sentinel: str = SENTINEL) -> str:
  """Remove the final sentinel line of a complete response.

  Carriage returns are dropped from line ends as iter_lines does, trailing
  blank lines are ignored, and only a sentinel on the last line is removed.
  """
  lines = [line.rstrip("\r") for line in text.split("\n")]
  while lines and not lines[-1].strip():
    lines.pop()
  if lines and _is_sentinel(lines[-1], sentinel):
    lines.pop()
  return join_lines(lines)


def join_lines(lines: List[str]) -> str:
  return "\n".join(lines)
