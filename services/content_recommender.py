"""Content-based similarity between meals.

Meals are vectorized from their nutrition (calories, protein, carbs, fat,
fiber) and binary dietary tags, then compared with cosine similarity. Used
to pick a replacement that stays close to the meal it replaces.
"""

from typing import List, Sequence, Tuple
from core.logger import get_logger
from schemas.menu_schema import load_json_list
import numpy as np
from sklearn.metrics.pairwise import cosine_similarity

logger = get_logger("services.content_recommender")

NUMERIC_FIELDS = ("calories", "protein", "carbs", "fat", "fiber")


def _tags_of(meal) -> List[str]:
    return [t.lower() for t in load_json_list(getattr(meal, "dietary_tags", None))]


class ContentBasedRecommender:
    """Ranks candidate meals by similarity to a reference meal.

    Methods
    -------
    vectorize(meals)
        Convert meals (ORM rows or payloads) into a numeric feature matrix.
    rank_similar(reference, candidates)
        Return ``(candidate_index, score)`` pairs, most similar first.
    """

    def vectorize(self, meals: Sequence) -> np.ndarray:
        """Convert meals into a numeric feature matrix.

        Rows are the numeric features scaled by their column maximum (so
        calories do not dominate) followed by one column per dietary tag.

        Args:
            meals: Objects exposing the numeric fields and `dietary_tags`.

        Returns:
            numpy.ndarray of shape (n_meals, n_features).
        """
        parsed = [_tags_of(m) for m in meals]
        tag_list = sorted({t for tags in parsed for t in tags})
        features = []
        for meal, tags in zip(meals, parsed):
            num_feats = [float(getattr(meal, f, 0) or 0.0) for f in NUMERIC_FIELDS]
            tag_feats = [1.0 if t in tags else 0.0 for t in tag_list]
            features.append(num_feats + tag_feats)

        X = np.array(features, dtype=float)
        if X.shape[0] > 0:
            num_cols = len(NUMERIC_FIELDS)
            col_max = X[:, :num_cols].max(axis=0)
            col_max[col_max == 0] = 1.0
            X[:, :num_cols] = X[:, :num_cols] / col_max
        return X

    def rank_similar(self, reference, candidates: Sequence) -> List[Tuple[int, float]]:
        """Rank candidates by cosine similarity to ``reference``.

        Args:
            reference: The meal being replaced.
            candidates: Possible replacements.

        Returns:
            List of (index into candidates, score), highest score first. Ties
            keep the candidates' original order.
        """
        if not candidates:
            return []
        X = self.vectorize([reference, *candidates])
        sims = cosine_similarity(X[:1], X[1:])[0]
        ranked = [(i, float(sims[i])) for i in range(len(candidates))]
        ranked.sort(key=lambda x: x[1], reverse=True)
        logger.debug("Ranked %s candidates against %s", len(ranked), getattr(reference, "name", None))
        return ranked


content_recommender = ContentBasedRecommender()
