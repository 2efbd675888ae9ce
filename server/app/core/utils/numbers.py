# server/app/core/utils/numbers.py
"""server/app/core/utils/numbers.py
~~~~~~~~~~~~~~~~~~~~~~~~
Arrondis d'affichage.

`round()` de Python arrondit les demis au pair le plus proche (12.5 -> 12) ;
les écrans attendent l'arrondi "demi vers le haut" (12.5 -> 13, -2.5 -> -2).
"""

import math


def round_half_up(value: float) -> int:
    """Arrondi à l'entier, les demis vers +infini."""
    return math.floor(value + 0.5)
