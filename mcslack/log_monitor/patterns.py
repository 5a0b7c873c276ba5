"""Message catalog used to classify server log messages."""

from typing import Annotated, List

from pydantic import BaseModel, Field


class ClassifierConfig(BaseModel):
    """
    Regular expressions matched against the message part of a log line.

    Each pattern must match the whole message. `\\S+` stands for the player
    name and `.*` for a free-form killer, item or reason. Override the lists
    in config.toml when the game's message catalog changes.
    """

    join_leave_patterns: Annotated[
        List[str],
        Field(
            description="Patterns for players joining or leaving",
            default_factory=lambda: [
                r"\S+ joined the game",
                r"\S+ lost connection: .*",
                r"\S+ left the game",
            ],
        ),
    ]

    # https://minecraft.wiki/w/Death_messages
    death_patterns: Annotated[
        List[str],
        Field(
            description="Patterns for player death messages",
            default_factory=lambda: [
                r"\S+ was shot by arrow",
                r"\S+ was shot by .*",
                r"\S+ was shot by .* using .*",
                r"\S+ was pricked to death",
                r"\S+ walked into a cactus whilst trying to escape .*",
                r"\S+ was stabbed to death",
                r"\S+ was roasted in dragon breath",
                r"\S+ was roasted in dragon breath by .*",
                r"\S+ drowned.*",
                r"\S+ drowned whilst trying to escape .*",
                r"\S+ suffocated in a wall.*",
                r"\S+ suffocated in a wall whilst fighting .*",
                r"\S+ was squished too much.*",
                r"\S+ was squashed by .*",
                r"\S+ experienced kinetic energy",
                r"\S+ experienced kinetic energy whilst trying to escape .*",
                r"\S+ removed an elytra while flying whilst trying to escape .*",
                r"\S+ blew up",
                r"\S+ was blown up by .*",
                r"\S+ was blown up by .* using .*",
                r"\S+ was killed by .*",
                r"\S+ hit the ground too hard",
                r"\S+ hit the ground too hard whilst trying to escape .*",
                r"\S+ fell from a high place",
                r"\S+ fell off a ladder",
                r"\S+ fell off some vines",
                r"\S+ fell out of the water",
                r"\S+ fell into a patch of fire",
                r"\S+ fell into a patch of cacti",
                r"\S+ was doomed to fall",
                r"\S+ was doomed to fall by .*",
                r"\S+ was doomed to fall by .* using .*",
                r"\S+ fell too far and was finished by .*",
                r"\S+ fell too far and was finished by .* using .*",
                r"\S+ was shot off some vines by .*",
                r"\S+ was shot off a ladder by .*",
                r"\S+ was blown from a high place by .*",
                r"\S+ was squashed by a falling anvil",
                r"\S+ was squashed by a falling anvil whilst fighting .*",
                r"\S+ was squashed by a falling block",
                r"\S+ was squashed by a falling block whilst fighting .*",
                r"\S+ was killed by magic",
                r"\S+ went up in flames",
                r"\S+ burned to death",
                r"\S+ was burnt to a crisp whilst fighting .*",
                r"\S+ walked into fire whilst fighting .*",
                r"\S+ went off with a bang",
                r"\S+ went off with a bang whilst fighting .*",
                r"\S+ tried to swim in lava",
                r"\S+ tried to swim in lava to escape .*",
                r"\S+ was struck by lightning",
                r"\S+ was struck by lightning whilst fighting .*",
                r"\S+ discovered the floor was lava",
                r"\S+ walked into danger zone due to .*",
                r"\S+ was slain by .*",
                r"\S+ was slain by .* using .*",
                r"\S+ got finished off by .*",
                r"\S+ got finished off by .* using .*",
                r"\S+ was fireballed by .*",
                r"\S+ was fireballed by .* using .*",
                r"\S+ was stung to death",
                r"\S+ was killed by even more magic",
                r"\S+ was killed by .* using magic",
                r"\S+ was killed by .* using .*",
                r"\S+ starved to death",
                r"\S+ was poked to death by a sweet berry bush",
                r"\S+ was poked to death by a sweet berry bush whilst trying to escape .*",
                r"\S+ was killed trying to hurt .*",
                r"\S+ was killed by .* trying to hurt .*",
                r"\S+ was impaled by .*",
                r"\S+ was impaled by .* with .*",
                r"\S+ fell out of the world",
                r"\S+ fell from a high place and fell out of the world",
                r"\S+ didn't want to live in the same world as .*",
                r"\S+ withered away",
                r"\S+ withered away whilst fighting .*",
                r"\S+ was pummeled by .*",
                r"\S+ was pummeled by .* using .*",
                r"\S+ died",
                r"\S+ died because of .*",
            ],
        ),
    ]

    advancement_patterns: Annotated[
        List[str],
        Field(
            description="Patterns for advancements, challenges and goals",
            default_factory=lambda: [
                r"\S+ has made the advancement .*",
                r"\S+ has completed the challenge .*",
                r"\S+ has reached the goal .*",
            ],
        ),
    ]
