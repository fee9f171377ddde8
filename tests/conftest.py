import pytest

from app import create_app
from data_store import LocalDataStore
from pydantic_models import Condition, Recommendation, Resource, Symptom
from settings import Settings


class FakeLLM:
    """Records prompts and returns a fixed answer, or raises the given error."""

    def __init__(self, answer="", error=None):
        self.answer = answer
        self.error = error
        self.prompts = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def store():
    return LocalDataStore(
        symptoms=[
            Symptom(id=1, name="Fever"),
            Symptom(id=2, name="Cough"),
            Symptom(id=3, name="Sneezing"),
        ],
        conditions=[
            Condition(id=10, name="Common Cold"),
            Condition(id=11, name="Allergies"),
            Condition(id=12, name="Cold"),
        ],
        recommendations=[
            Recommendation(id=100, condition_id=11, text="Avoid triggers."),
            Recommendation(id=101, condition_id=10, text="Rest."),
            Recommendation(id=102, condition_id=11, text="Try antihistamines."),
        ],
        resources=[
            Resource(id=1, type="emergency", name="911"),
            Resource(id=2, type="telehealth", name="Virtual care"),
            Resource(id=3, type="pharmacy", name="Pharmacy"),
            Resource(id=4, type="general_clinic", name="Community clinic"),
        ],
    )


@pytest.fixture
def fake_llm():
    return FakeLLM(answer="**Condition:** Seasonal Allergies\n**Description:** Hay fever.\n")


@pytest.fixture
def client(store, fake_llm):
    app = create_app(store=store, llm=fake_llm, settings=Settings())
    app.config["TESTING"] = True
    return app.test_client()
