"""Sports admin client: REST stores and cascading sponsor cleanup."""
