import logging

from ghost.config import NLP_MODEL_NAME

logger = logging.getLogger(__name__)


def load_nlp_model(model_name: str = NLP_MODEL_NAME):
    """
    Load the spaCy pipeline used for lemmatization.

    Strategy (no network, no dynamic downloads):
    1. Prefer the installed model package's own `load()` function.
    2. Fall back to `spacy.load(model_name)` if that fails.

    Returns None when neither works; callers then fall back to their
    explicit lemma tables.
    """
    try:
        import importlib

        package = importlib.import_module(model_name)
        return package.load()
    except Exception as e1:
        try:
            import spacy  # type: ignore

            return spacy.load(model_name)
        except Exception as e2:
            logger.critical(
                "Could not load NLP model '%s': %s / %s", model_name, e1, e2
            )
            return None
