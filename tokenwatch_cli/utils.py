"""
Utility functions for the tokenwatch CLI
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel

from tokenwatch.utils.solana_error import ValidationError

logger = logging.getLogger("tokenwatch")

def setup_logging(debug: bool = False):
    """Set up logging for the CLI"""
    log_level = logging.DEBUG if debug else logging.WARNING

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s: %(message)s',
                                  datefmt='%Y-%m-%d %H:%M:%S')

    # Log to stderr so stdout stays clean for JSON output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(console_handler)

    # Package loggers print to stdout by default; send them through stderr instead
    for name in list(logging.root.manager.loggerDict):
        if name.startswith('tokenwatch.'):
            package_logger = logging.getLogger(name)
            package_logger.handlers = []
            package_logger.propagate = True
            package_logger.setLevel(log_level)

    logger.setLevel(log_level)
    logger.debug("Logging initialized")

def load_payload(path: str) -> Any:
    """
    Load transactions from a file.

    The file may hold one JSON document (an envelope, a list of envelopes or
    a block object) or JSON Lines with one envelope per line.
    """
    text = Path(path).read_text(encoding='utf-8')
    if not text.strip():
        raise ValidationError(f"{path} is empty")

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    envelopes = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            envelopes.append(json.loads(line))
        except json.JSONDecodeError as e:
            raise ValidationError(f"{path}:{line_number}: invalid JSON ({e.msg})") from e
    return envelopes

def as_block(payload: Any) -> Dict[str, Any]:
    """Wrap loaded input in the block shape BlockHandler expects"""
    if isinstance(payload, dict) and isinstance(payload.get('transactions'), list):
        return payload
    if isinstance(payload, list):
        return {'transactions': payload}
    return {'transactions': [payload]}

def format_output(data: Dict[str, Any], output_path: Optional[str], console: Console):
    """Write data as JSON to a file or the console"""
    formatted_data = json.dumps(data, indent=2)

    if output_path:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(formatted_data)
        console.print(f"[green]Output saved to {output_path}[/green]")
    else:
        console.print_json(formatted_data)

def handle_error(error: Exception, console: Console):
    """Report an input error"""
    console.print(Panel(f"[bold red]Error: {str(error)}[/bold red]", title="Error", expand=False))
    logger.error(f"CLI error: {str(error)}")

def truncate_string(s: Optional[str], max_length: int = 12) -> str:
    """Shorten a base58 key or signature for table display"""
    if not s:
        return "-"
    if len(s) <= max_length:
        return s
    return s[:max_length - 3] + "..."
