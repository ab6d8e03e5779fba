"""Infrastructure layer: config, logging and storage primitives."""
