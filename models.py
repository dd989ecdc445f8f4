from sqlalchemy import Column, String, Text
from sqlalchemy.dialects.mysql import LONGTEXT
from db import Base

MAX_SHORT_ID_LENGTH = 512

# MySQL compares strings case-insensitively by default; short IDs are case-sensitive.
ShortIdType = String(MAX_SHORT_ID_LENGTH).with_variant(
    String(MAX_SHORT_ID_LENGTH, collation="utf8mb4_bin"), "mysql"
)
# Targets are opaque and unbounded; plain TEXT on MySQL stops at 64 KiB.
TargetUrlType = Text().with_variant(LONGTEXT(), "mysql")


class Link(Base):
    __tablename__ = "links"

    short_id = Column(ShortIdType, primary_key=True)
    target_url = Column(TargetUrlType, nullable=False)
