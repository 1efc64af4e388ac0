"""Cross-cutting helpers: enums, logging and datetime utilities."""
