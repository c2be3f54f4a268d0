import pytest

from crossquote.config import CrossquoteSettings, reset_settings
from crossquote.data import InMemoryDocumentStore, default_registry


EN_16_50 = (
    "Questioner: Can you tell me of the veil? Ra: I am Ra. "
    "The veil is the forgetting that each incarnation brings."
)
EN_16_51 = "Questioner: What is love? Ra: I am Ra. Love is unity. It is the Creator."
FR_16_51 = (
    "Questionneur: Qu'est-ce que l'amour? Ra: Je suis Ra. "
    "L'amour est l'unité. C'est le Créateur."
)

DOCUMENTS = {
    "en": {"16.50": EN_16_50, "16.51": EN_16_51},
    "fr": {"16.51": FR_16_51},
}


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings() -> CrossquoteSettings:
    return CrossquoteSettings()


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def en(registry):
    return registry.get("en")


@pytest.fixture
def fr(registry):
    return registry.get("fr")


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore(DOCUMENTS)
