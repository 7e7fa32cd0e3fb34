from sqlalchemy import BigInteger, Integer

# SQLite only autoincrements INTEGER PRIMARY KEY columns, so BigInteger ids
# fall back to Integer there (in-memory test databases).
BIGINT = BigInteger().with_variant(Integer, "sqlite")
