"""Business operations over the Entity Store."""
