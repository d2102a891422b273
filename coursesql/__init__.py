"""
Course SQL: Natural Language Course Registration Queries

Translates a student's question into a SQL query with an OpenAI chat
model, runs it against a read-only SQLite snapshot of course sections
and prints the result as a table.
"""

__version__ = "0.1.0"
