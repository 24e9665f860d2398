"""SuperMemo-style interval and ease factor updates for flashcard reviews."""
from prep_api.utils import round_half_up

DEFAULT_INTERVAL = 1
DEFAULT_EASE = 2.5
MIN_EASE = 1.3

RESPONSES = ("again", "hard", "good", "easy")
SUCCESS_RESPONSES = ("good", "easy")


def next_schedule(interval: int, ease: float, response: str) -> tuple[int, float]:
    if response == "again":
        new_interval = 1
        new_ease = max(MIN_EASE, round(ease - 0.2, 2))
    elif response == "hard":
        new_interval = max(1, round_half_up(interval * 1.2))
        new_ease = max(MIN_EASE, round(ease - 0.15, 2))
    elif response == "good":
        new_interval = round_half_up(interval * ease)
        new_ease = ease
    elif response == "easy":
        new_interval = round_half_up(interval * ease * 1.3)
        new_ease = round(ease + 0.15, 2)
    else:
        raise ValueError(f"Unknown review response: {response}")
    return max(1, new_interval), new_ease


def recall_success(response: str) -> bool:
    return response in SUCCESS_RESPONSES
