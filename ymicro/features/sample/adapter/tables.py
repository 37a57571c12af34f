from sqlalchemy import Column, Integer, MetaData, String, Table

metadata = MetaData()

greetings = Table(
    "greetings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("greetingText", String(32), nullable=False),
)
