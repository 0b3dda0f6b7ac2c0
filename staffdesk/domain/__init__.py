"""Domain layer: entities, enums and ports. No framework dependencies."""
