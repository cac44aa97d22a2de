"""Loading and reading OpenAPI/Swagger descriptions."""
