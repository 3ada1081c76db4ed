"""Centralized imports for the entire project (app + leftover_checker)."""

# Standard library
import html
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# External
from dotenv import load_dotenv
from fastapi import (
    APIRouter,
    HTTPException,
    Query,
)
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
