"""Ranking policies and the athlete ranker."""

from .base import RankingPolicy

DEFAULT_RANKING_POLICY = "competition"

# Policy registry - policies register themselves on import
_ranking_policies: dict[str, type[RankingPolicy]] = {}


def register_ranking_policy(policy_class: type[RankingPolicy]) -> type[RankingPolicy]:
    """Decorator to register a ranking policy class under its key."""
    _ranking_policies[policy_class.key] = policy_class
    return policy_class


def get_ranking_policy(key: str | None = None) -> RankingPolicy:
    """Return an instance of the policy registered under key.

    Raises:
        KeyError: If no policy is registered under that key
    """
    key = key or DEFAULT_RANKING_POLICY
    try:
        return _ranking_policies[key]()
    except KeyError:
        raise KeyError(
            f"Unknown ranking policy {key!r}; choose from {', '.join(sorted(_ranking_policies))}"
        ) from None


def get_all_ranking_policies() -> list[RankingPolicy]:
    """Return instances of all registered ranking policies."""
    return [policy_class() for policy_class in _ranking_policies.values()]


# Import policies to register them
from . import competition  # noqa: E402, F401
from . import dense  # noqa: E402, F401
from .ranker import rank_athletes, rank_for_judge  # noqa: E402, F401
