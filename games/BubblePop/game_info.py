"""
Bubble Pop - Game Info

Metadata and the factory function entry points use to create the game.
"""

# Game metadata
NAME = "Bubble Pop"
DESCRIPTION = "Pop the falling bubbles! Gold ones are worth 5."
VERSION = "1.0.0"
AUTHOR = "Bubble Pop Team"


def get_game_mode(**kwargs):
    """
    Factory function to create a BubblePopMode instance.

    Args:
        **kwargs: Game configuration options
            - width, height: Playfield size
            - gold_chance: Probability a bubble is gold
            - level_up_delay: Seconds before the next level starts
            - seed: Random seed
            - auto_start: Start the run immediately

    Returns:
        BubblePopMode instance
    """
    from games.BubblePop.game_mode import BubblePopMode

    # Filter out None values so the game's defaults apply
    game_kwargs = {k: v for k, v in kwargs.items() if v is not None}
    return BubblePopMode(**game_kwargs)
