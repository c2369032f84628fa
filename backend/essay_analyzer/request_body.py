from __future__ import annotations
import json
from typing import Any

from fastapi import Request
from starlette.requests import ClientDisconnect

from .errors import ValidationError


async def read_json_body(request: Request) -> Any:
	try:
		return await request.json()
	except ClientDisconnect as exc:
		raise ValidationError("Client disconnected") from exc
	except (json.JSONDecodeError, UnicodeDecodeError) as exc:
		raise ValidationError("Invalid JSON body") from exc
