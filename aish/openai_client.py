from __future__ import annotations

import json
import logging
from typing import Dict, Iterator, List, Optional

import httpx

from .config import DEFAULT_TEMPERATURE, SessionConfig

logger = logging.getLogger(__name__)


class CompletionError(RuntimeError):
  """The chat completion request failed; the session cannot continue."""


class CompletionClient:
  def __init__(
    self,
    base_url: str,
    model: str,
    api_key: str = "",
    temperature: float = DEFAULT_TEMPERATURE,
    transport: Optional[httpx.BaseTransport] = None,
  ) -> None:
    self._base_url = base_url.rstrip("/")
    self._model = model
    self._api_key = api_key
    self._temperature = temperature
    self._transport = transport

  @classmethod
  def from_config(cls, config: SessionConfig, transport: Optional[httpx.BaseTransport] = None) -> "CompletionClient":
    return cls(
      config.base_url,
      config.model,
      api_key=config.api_key,
      temperature=config.temperature,
      transport=transport,
    )

  @property
  def model(self) -> str:
    return self._model

  def _headers(self) -> Dict[str, str]:
    if not self._api_key:
      return {}
    return {"Authorization": f"Bearer {self._api_key}"}

  def _payload(self, messages: List[Dict[str, str]], stream: bool) -> Dict[str, object]:
    payload: Dict[str, object] = {
      "model": self._model,
      "messages": messages,
      "temperature": self._temperature,
    }
    if stream:
      payload["stream"] = True
    return payload

  def _client(self) -> httpx.Client:
    return httpx.Client(timeout=None, transport=self._transport)

  def complete(self, messages: List[Dict[str, str]]) -> str:
    logger.debug("completion request: model=%s messages=%d", self._model, len(messages))
    try:
      with self._client() as client:
        response = client.post(
          f"{self._base_url}/chat/completions",
          headers=self._headers(),
          json=self._payload(messages, stream=False),
        )
        if response.status_code >= 400:
          raise CompletionError(
            f"completion error {response.status_code}: {response.text}"
          )
        data = response.json()
    except httpx.HTTPError as exc:
      raise CompletionError(f"completion request failed: {exc}") from exc
    except json.JSONDecodeError as exc:
      raise CompletionError(f"completion response is not JSON: {exc}") from exc
    try:
      return data["choices"][0]["message"]["content"] or ""
    except (KeyError, IndexError, TypeError) as exc:
      raise CompletionError(f"unexpected completion response: {data!r}") from exc

  def stream(self, messages: List[Dict[str, str]]) -> Iterator[str]:
    logger.debug("stream request: model=%s messages=%d", self._model, len(messages))
    try:
      with self._client() as client:
        with client.stream(
          "POST",
          f"{self._base_url}/chat/completions",
          headers=self._headers(),
          json=self._payload(messages, stream=True),
        ) as response:
          if response.status_code >= 400:
            body = response.read()
            raise CompletionError(
              f"stream error {response.status_code}: {body.decode('utf-8', 'ignore')}"
            )
          for line in response.iter_lines():
            if not line or not line.startswith("data: "):
              continue
            payload = line[len("data: ") :]
            if payload.strip() == "[DONE]":
              break
            try:
              data = json.loads(payload)
              delta = data["choices"][0]["delta"].get("content")
            except (KeyError, IndexError, TypeError, AttributeError, json.JSONDecodeError):
              logger.debug("skipping malformed stream event: %s", payload)
              continue
            if delta:
              yield delta
    except httpx.HTTPError as exc:
      raise CompletionError(f"stream request failed: {exc}") from exc
