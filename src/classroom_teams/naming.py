"""Team naming convention for group teams.

An organization can hold many teams and only some of them belong to groups of
students. Group teams are recognized by a fixed ``"group "`` prefix on their
display name:

    "01"  <-> "group 01"
    "i02" <-> "group i02"

No escaping is done: any team whose name starts with the prefix is treated as
a group team.
"""

PREFIX = "group "


class InvalidNameError(ValueError):
    """Raised when a team name does not follow the group team convention."""


def to_team_name(group: str) -> str:
    """Return the team display name for *group* (``"01"`` -> ``"group 01"``)."""
    return PREFIX + group


def is_group_team(name: str) -> bool:
    """Return True if *name* is the display name of a group team."""
    if name is None:
        raise ValueError("Team name cannot be None")
    return name.startswith(PREFIX)


def to_group(name: str) -> str:
    """Extract the group from a group team name (``"group 01"`` -> ``"01"``)."""
    if not is_group_team(name):
        raise InvalidNameError(
            f"Team name '{name}' does not correspond to a group team: "
            f"it should start with '{PREFIX}'"
        )
    return name[len(PREFIX) :]
