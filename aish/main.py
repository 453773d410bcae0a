import argparse
import logging
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .audit import configure_logging
from .config import ConfigError, load_config
from .openai_client import CompletionClient
from .shell import AiShell

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
  parser = argparse.ArgumentParser(
    prog="aish",
    description="A shell whose output is simulated by an OpenAI-compatible chat model.",
  )
  parser.add_argument("-c", "--command", help="run a single command and exit")
  parser.add_argument("--model", help="chat model (OPENAI_MODEL)")
  parser.add_argument("--base-url", help="API base URL (OPENAI_BASE_URL)")
  parser.add_argument("--os", dest="os_name", help="simulated operating system (PROMPT_OS)")
  parser.add_argument("--user", dest="username", help="simulated username (AISH_USERNAME)")
  parser.add_argument("--host", dest="hostname", help="simulated hostname (AISH_HOSTNAME)")
  parser.add_argument("--log-file", help="audit log destination (LOG_FILE)")
  parser.add_argument(
    "--guard",
    action="store_true",
    default=None,
    help="answer prompt-injection attempts locally (AISH_GUARD)",
  )
  return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
  args = parse_args(argv)
  load_dotenv(find_dotenv(usecwd=True))

  try:
    config = load_config(**vars(args))
  except ConfigError as exc:
    print(f"aish: {exc}", file=sys.stderr)
    return 2

  configure_logging(config.log_file, config.log_level)
  client = CompletionClient.from_config(config)
  shell = AiShell(config, client)

  logger.info("New session user=%s host=%s model=%s", config.username, config.hostname, config.model)
  try:
    return shell.run()
  finally:
    logger.info("Session end")
