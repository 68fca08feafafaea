from dataclasses import dataclass

from .effects import NONE


@dataclass(frozen=True)
class ProfileState:
    """Состояние экрана профиля; ядро его не интерпретирует"""


def profile_reducer(state: ProfileState, action):
    return state, NONE
