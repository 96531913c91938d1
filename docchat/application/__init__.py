"""Application layer: services and adapters orchestrating core and boundary."""
