import os
import re
import sys
import json
import time
import logging
import datetime

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_dir="logs", level="INFO", console_level=logging.WARNING):
    """Send log records to a timestamped file and, above console_level, to stdout"""
    os.makedirs(log_dir, exist_ok=True)
    log_file_path = os.path.join(log_dir, f"extraction_{int(time.time())}.log")

    file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(level=level, handlers=[file_handler, console_handler], force=True)
    return log_file_path


def print_status(message):
    """Print status message to console and log it"""
    print(f"STATUS: {message}")
    logger.info(f"STATUS: {message}")


def ensure_directory(path):
    os.makedirs(path, exist_ok=True)


def read_json(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_json_optional(path):
    """Read a JSON sidecar file, returning None when it is absent or unreadable"""
    try:
        return read_json(path)
    except FileNotFoundError:
        logger.info(f"Optional file not found: {path}")
        return None
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return None


def write_json(path, data):
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def clean_text(text):
    if not text:
        return ""
    return re.sub(r"\s+", " ", text.replace("\u00a0", " ")).strip()


def title_case(value):
    """Uppercase the first letter of every space separated token, lowercase the rest"""
    if not value:
        return value
    return " ".join(token[:1].upper() + token[1:].lower() for token in value.split())


def parse_date_to_iso(date_string):
    """Convert various date formats to ISO YYYY-MM-DD format"""
    if not date_string or not date_string.strip():
        return None

    date_string = date_string.strip()

    date_patterns = [
        "%m/%d/%Y",  # MM/DD/YYYY (03/24/2025)
        "%m-%d-%Y",  # MM-DD-YYYY
        "%Y-%m-%d",  # already ISO
        "%Y/%m/%d",
        "%m/%d/%y",
        "%B %d, %Y",  # March 24, 2025
        "%b %d, %Y",  # Mar 24, 2025
    ]

    for pattern in date_patterns:
        try:
            return datetime.datetime.strptime(date_string, pattern).strftime("%Y-%m-%d")
        except ValueError:
            continue

    # Try to find MM/DD/YYYY anywhere in the string
    match = re.search(r"(\d{1,2})/(\d{1,2})/(\d{4})", date_string)
    if match:
        month, day, year = match.groups()
        try:
            return datetime.date(int(year), int(month), int(day)).isoformat()
        except ValueError:
            pass

    return None


def is_iso_date(value):
    if not isinstance(value, str) or not re.fullmatch(r"\d{4}-\d{2}-\d{2}", value):
        return False
    try:
        datetime.date.fromisoformat(value)
    except ValueError:
        return False
    return True


def parse_currency(text):
    """'$1,234.50' -> 1234.5; None when no number is present"""
    if text is None:
        return None
    cleaned = re.sub(r"[^0-9.\-]", "", str(text))
    if not cleaned or cleaned in {"-", ".", "-."}:
        return None
    try:
        return round(float(cleaned), 2)
    except ValueError:
        return None


def parse_int(text):
    if text is None:
        return None
    cleaned = re.sub(r"[^0-9\-]", "", str(text))
    if not cleaned or cleaned == "-":
        return None
    try:
        return int(cleaned)
    except ValueError:
        return None
