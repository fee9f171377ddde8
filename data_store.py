import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from errors import StartupDataError
from pydantic_models import Condition, Recommendation, Resource, Symptom

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class LocalDataStore:
    """
    Read-only tables of symptoms, conditions, recommendations and resources.

    Built once at startup and shared by every request; rows are frozen models
    held in tuples, so nothing here changes after construction.
    """

    __slots__ = ("_symptoms", "_conditions", "_recommendations", "_resources")

    def __init__(
        self,
        symptoms: Iterable[Symptom] = (),
        conditions: Iterable[Condition] = (),
        recommendations: Iterable[Recommendation] = (),
        resources: Iterable[Resource] = (),
    ):
        self._symptoms = tuple(symptoms)
        self._conditions = tuple(conditions)
        self._recommendations = tuple(recommendations)
        self._resources = tuple(resources)

    @property
    def symptoms(self) -> Tuple[Symptom, ...]:
        return self._symptoms

    @property
    def conditions(self) -> Tuple[Condition, ...]:
        return self._conditions

    @property
    def recommendations(self) -> Tuple[Recommendation, ...]:
        return self._recommendations

    @property
    def resources(self) -> Tuple[Resource, ...]:
        return self._resources

    def symptom_name(self, symptom_id) -> Optional[str]:
        for symptom in self._symptoms:
            # JSON true == 1 in Python; booleans never name a symptom
            if symptom.id == symptom_id and not isinstance(symptom_id, bool):
                return symptom.name
        return None


def _load_table(path: Path, model: Type[T]) -> List[T]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            rows = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise StartupDataError(f"Could not read {path.name}: {e}") from e

    if not isinstance(rows, list):
        raise StartupDataError(f"{path.name} must contain a JSON list")

    try:
        return [model.model_validate(row) for row in rows]
    except ValidationError as e:
        raise StartupDataError(f"Invalid entry in {path.name}: {e}") from e


def load_data_store(data_dir: Union[str, Path]) -> LocalDataStore:
    """Load the four JSON datasets from data_dir. Any failure raises StartupDataError."""
    data_dir = Path(data_dir)
    store = LocalDataStore(
        symptoms=_load_table(data_dir / "symptoms.json", Symptom),
        conditions=_load_table(data_dir / "conditions.json", Condition),
        recommendations=_load_table(data_dir / "recommendations.json", Recommendation),
        resources=_load_table(data_dir / "resources.json", Resource),
    )
    logger.info(
        "Local data loaded from %s: %d symptoms, %d conditions, %d recommendations, %d resources",
        data_dir,
        len(store.symptoms),
        len(store.conditions),
        len(store.recommendations),
        len(store.resources),
    )
    return store
