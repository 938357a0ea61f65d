"""
Planner variant selector.

Every variant is a combination of three switches on the same planning loop:
cost-optimizing extension, a second tree with the connect phase, and
shortcut post-processing.
"""

from enum import Enum


class Variant(Enum):
    """Sampling-based planner variants, keyed by their config/CLI name."""

    RRT = 'rrt'
    RRT_STAR = 'rrt_star'
    RRT_CONNECT = 'rrt_connect'
    RRT_STAR_CONNECT = 'rrt_star_connect'
    RRT_CONNECT_SHORTCUT = 'rrt_connect_shortcut'

    @property
    def optimizing(self) -> bool:
        """Uses near-set parent selection and rewiring when extending."""
        return self in (Variant.RRT_STAR, Variant.RRT_STAR_CONNECT)

    @property
    def bidirectional(self) -> bool:
        """Grows a start tree and a goal tree joined by the connect phase."""
        return self in (Variant.RRT_CONNECT, Variant.RRT_STAR_CONNECT,
                        Variant.RRT_CONNECT_SHORTCUT)

    @property
    def shortcut(self) -> bool:
        """Post-processes the raw path with the shortcutter."""
        return self is Variant.RRT_CONNECT_SHORTCUT

    @property
    def label(self) -> str:
        """Display name used in reports and plots."""
        return {
            Variant.RRT: 'RRT',
            Variant.RRT_STAR: 'RRT*',
            Variant.RRT_CONNECT: 'RRT-Connect',
            Variant.RRT_STAR_CONNECT: 'RRT*-Connect',
            Variant.RRT_CONNECT_SHORTCUT: 'RRT-Connect+Shortcut',
        }[self]

    @classmethod
    def from_name(cls, name: str) -> "Variant":
        """
        Look up a variant by name, accepting '-' in place of '_'.

        Raises:
            ValueError: If the name matches no variant
        """
        key = name.strip().lower().replace('-', '_')
        for variant in cls:
            if variant.value == key:
                return variant
        valid = ', '.join(v.value for v in cls)
        raise ValueError(f"Unknown algorithm '{name}'. Available algorithms: {valid}")
