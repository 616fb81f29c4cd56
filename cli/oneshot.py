"""One-shot mode: read a request from stdin, print the result as JSON"""

import asyncio
import json
import logging
import sys
import uuid
from typing import Optional, TextIO

from pydantic import ValidationError
from rich.console import Console

from api.models import GearRequest
from errors import GenerationError
from generation import GearGenerator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 2


async def _run(request: GearRequest, generator: GearGenerator, describe: bool) -> dict:
    request_id = str(uuid.uuid4())[:8]
    if describe:
        description = await generator.describe(request.to_generation_request(), request_id)
        return {"name": request.name, "description": description or ""}

    result = await generator.generate(request.to_generation_request(), request_id)
    return result.to_payload()


def run_oneshot(
    describe: bool = False,
    stdin: TextIO = None,
    stdout: TextIO = None,
    console: Optional[Console] = None,
    generator: Optional[GearGenerator] = None,
) -> int:
    """Generate one item from a JSON request on stdin

    Returns:
        Process exit code: 0 on success, 2 on any failure
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    console = console or Console(stderr=True)

    try:
        request = GearRequest.model_validate(json.loads(stdin.read()))
        generator = generator or GearGenerator.from_settings()
        payload = asyncio.run(_run(request, generator, describe))
    except json.JSONDecodeError as e:
        console.print(f"[red]Error in CLI mode:[/red] invalid request JSON: {e}")
        return EXIT_FAILED
    except ValidationError as e:
        console.print(f"[red]Error in CLI mode:[/red] invalid request: {e}")
        return EXIT_FAILED
    except GenerationError as e:
        logger.debug(f"One-shot generation failed: {e.to_dict()}")
        console.print(f"[red]Error in CLI mode:[/red] {e.kind}: {e.message}")
        return EXIT_FAILED

    stdout.write(json.dumps(payload) + "\n")
    return EXIT_OK
