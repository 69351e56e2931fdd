"""structlint: structural validator for NestJS/GraphQL TypeScript projects."""

__version__ = "0.3.0"
