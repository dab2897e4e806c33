"""Achievements and rewards fed by goal points.

Achievements unlock from the goal list itself. Rewards are claimed by the
user; claimed reward IDs are kept in the 'rewards_claimed' setting.
Claiming does not spend points.
"""

from meal_compass.config import get_json_setting, set_json_setting
from meal_compass.core.goals import COMPLETED
from meal_compass.db.models import Achievement, Goal, Reward

_CLAIMED_KEY = "rewards_claimed"

HYDRATION_HERO_GOALS = 5

ACHIEVEMENTS = [
    Achievement(
        id="achievement_1",
        title="Healthy Start",
        description="Create your first nutrition goal",
        image_url="https://images.unsplash.com/photo-1490645935967-10de6ba17061?w=120&h=120&fit=crop",
        points=100,
    ),
    Achievement(
        id="achievement_2",
        title="Hydration Hero",
        description="Complete 5 hydration goals",
        image_url="https://images.unsplash.com/photo-1495195134817-aeb325a55b65?w=120&h=120&fit=crop",
        points=250,
    ),
]

REWARDS = [
    Reward(
        id="reward_1",
        title="Premium Recipe Pack",
        description="Unlock 10 exclusive healthy recipes",
        image_url="https://images.unsplash.com/photo-1466637574441-749b8f19452f?w=120&h=120&fit=crop",
        points_cost=300,
        type="recipe",
    ),
    Reward(
        id="reward_2",
        title="Meal Plan Template",
        description="Professional meal planning template",
        image_url="https://images.unsplash.com/photo-1484480974693-6ca0a78fb36b?w=120&h=120&fit=crop",
        points_cost=200,
        type="template",
    ),
    Reward(
        id="reward_3",
        title="Health Guru Badge",
        description="Exclusive profile badge",
        image_url="https://images.unsplash.com/photo-1557425493-6f90ae4659fc?w=120&h=120&fit=crop",
        points_cost=1000,
        type="badge",
    ),
]

REWARD_TYPES = ["recipe", "template", "badge"]


def _achievement_unlocked(achievement_id: str, goals: list[Goal]) -> bool:
    if achievement_id == "achievement_1":
        return any(g.category == "nutrition" for g in goals)
    if achievement_id == "achievement_2":
        done = [g for g in goals if g.category == "hydration" and g.status == COMPLETED]
        return len(done) >= HYDRATION_HERO_GOALS
    return False


def achievements_for(goals: list[Goal]) -> list[Achievement]:
    """Return the achievement catalog with unlocked flags derived from goals."""
    return [
        Achievement(
            id=a.id, title=a.title, description=a.description,
            image_url=a.image_url, points=a.points,
            unlocked=_achievement_unlocked(a.id, goals),
        )
        for a in ACHIEVEMENTS
    ]


def load_claimed() -> set[str]:
    return set(get_json_setting(_CLAIMED_KEY, []))


def save_claimed(claimed: set[str]) -> None:
    set_json_setting(_CLAIMED_KEY, sorted(claimed))


class RewardBook:
    """The reward catalog as seen by one user."""

    def __init__(self, claimed_ids=()):
        self._claimed = set(claimed_ids)

    @property
    def claimed_ids(self) -> set[str]:
        return set(self._claimed)

    def rewards(self) -> list[Reward]:
        return [
            Reward(
                id=r.id, title=r.title, description=r.description,
                image_url=r.image_url, points_cost=r.points_cost, type=r.type,
                unlocked=r.id in self._claimed,
            )
            for r in REWARDS
        ]

    def claim(self, reward_id: str) -> bool:
        """Mark a reward unlocked. Returns False for unknown IDs; claiming twice is harmless."""
        if not any(r.id == reward_id for r in REWARDS):
            return False
        self._claimed.add(reward_id)
        return True

    def filter_rewards(self, kind: str = "all") -> list[Reward]:
        rewards = self.rewards()
        if kind == "all":
            return rewards
        return [r for r in rewards if r.type == kind]

    def sort_rewards(self, rewards: list[Reward], by: str = "date") -> list[Reward]:
        """Sort by 'points' (cheapest first), 'category' (reward type), or catalog order."""
        if by == "points":
            return sorted(rewards, key=lambda r: r.points_cost)
        if by == "category":
            return sorted(rewards, key=lambda r: r.type)
        return list(rewards)
