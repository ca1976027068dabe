"""
Word Genetic Map

Etymology lookups for a fixed set of English words, and persona
stories about them generated through the storyteller package.

LAYERS:
=======
1. config:    Environment → frozen AppConfig
2. lexicon:   JSON word table → WordEntry, analysis projection
3. service:   Validation, prompt rendering, model chain
4. api:       FastAPI routes and the JSON error envelope
"""

from .config import AppConfig, load_config, parse_model_priority, DEFAULT_MODEL_PRIORITY
from .lexicon import WordTable, project_analysis
from .service import EtymologyService, build_provider

__all__ = [
    'AppConfig',
    'load_config',
    'parse_model_priority',
    'DEFAULT_MODEL_PRIORITY',
    'WordTable',
    'project_analysis',
    'EtymologyService',
    'build_provider',
]
