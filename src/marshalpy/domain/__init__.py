"""Domain layer: resources, ports and the marshalling core."""
