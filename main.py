# main.py
import json
import logging
import sys

from api.api import scan
from config import configure_logging, get_settings

logger = logging.getLogger(__name__)


def print_json(obj):
    print(json.dumps(obj, indent=2, ensure_ascii=False))


def main_loop():
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        rules = settings.rules()
    except ValueError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    print("Phishing Risk Scanner - heuristic demo\n")
    while True:
        try:
            url = input("URL to analyze (press Enter to skip): ").strip()
            email = input("Sender email (press Enter to skip): ").strip()
            subject = input("Message subject (press Enter to skip): ").strip()
            body = input("Message body (press Enter to skip): ").strip()
            if not (url or email or subject or body):
                break

            verdict = scan(url=url, email=email, subject=subject, body=body, rules=rules)
            print_json(verdict.to_record())
        except (KeyboardInterrupt, EOFError):
            break


if __name__ == "__main__":
    main_loop()
