# geoharvest\core\use_cases\__init__.py
from .annotate_cities import AnnotateCities, build_state_translation_index
from .annotate_states import AnnotateStates
from .collect_geography import CollectGeography

__all__ = [
    "AnnotateCities",
    "AnnotateStates",
    "CollectGeography",
    "build_state_translation_index",
]
