from tenancy.core.cqrs.base import Command, CommandHandler, Query, QueryHandler

__all__ = ["Command", "CommandHandler", "Query", "QueryHandler"]
