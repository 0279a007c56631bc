"""HTTP API for creating and inspecting payments."""
