"""Glyphs shared by the built-in widgets."""

ARROW = "❯"
SMALL_ARROW = "›"
CROSS = "✖"
BOX_LIGHT_HORIZONTAL = "─"

# Drawn by ``DefaultSeparator``.
SEPARATOR_RULE = BOX_LIGHT_HORIZONTAL * 14
