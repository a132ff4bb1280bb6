"""Example bot built on interaction_router."""
