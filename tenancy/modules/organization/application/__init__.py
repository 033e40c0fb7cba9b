"""Organization application layer: commands, queries and their DTOs."""
