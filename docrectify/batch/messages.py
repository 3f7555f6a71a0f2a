"""
User-facing batch messages.
"""

import logging

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

MESSAGES = {
    "en": {
        "batch_done": "Crop complete!",
        "batch_nothing_found": "No document identified.",
        "item_failed": "Could not process '{name}': {reason}",
        "item_restored": "Image restored.",
    },
    "pt-BR": {
        "batch_done": "Recorte concluído!",
        "batch_nothing_found": "Nenhum documento identificado.",
        "item_failed": "Não foi possível processar '{name}': {reason}",
        "item_restored": "Imagem restaurada.",
    },
}


def translate(key: str, language: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """Look up ``key`` for ``language``, falling back to English."""
    table = MESSAGES.get(language)
    if table is None:
        logger.debug(f"Unknown language '{language}', using {DEFAULT_LANGUAGE}")
        table = MESSAGES[DEFAULT_LANGUAGE]
    return table[key].format(**kwargs)
