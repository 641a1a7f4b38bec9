# backend/hub/env.py
from __future__ import annotations

import logging
from pathlib import Path
from os import environ as env
from dotenv import load_dotenv, find_dotenv

log = logging.getLogger("env")

# Try CWD→parents; if that fails, try repo-root/.env (…/backend/../.env)
dotenv_path = find_dotenv(usecwd=True)
if not dotenv_path:
    repo_root = Path(__file__).resolve().parents[1].parent  # backend/ -> repo root
    candidate = repo_root / ".env"
    dotenv_path = str(candidate) if candidate.exists() else ""

# Load only once; do NOT override real environment
load_dotenv(dotenv_path or None, override=False)


def mask(val: str | None) -> str:
    if not val:
        return "<missing>"
    if len(val) <= 8:
        return "********"
    return f"{val[:4]}…{val[-4:]}"


def describe() -> str:
    return f".env loaded from: {dotenv_path or '<none>'} | LOVABLE_API_KEY: {mask(env.get('LOVABLE_API_KEY'))}"


__all__ = ["env", "mask", "describe"]
