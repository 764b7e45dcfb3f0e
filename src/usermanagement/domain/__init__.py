"""Domain layer: entities, repository contracts and business services."""
