"""
Lead model — one row per prospective student contact.

Intake fields are owned by the lead sources; the recompute job only writes the
derived columns (name_score, lead_score, lead_quality, country, scored_at).
"""
from sqlalchemy import Column, Integer, Text, Boolean, DateTime
from sqlalchemy.sql import func

from leadrank.database import Base


class Lead(Base):
    __tablename__ = 'leads'

    id = Column(Integer, primary_key=True, autoincrement=True)
    prospect_name = Column(Text, nullable=True)
    prospect_email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)               # free-form, any formatting
    intake = Column(Text, nullable=True)              # "February 2025", "2025-05", ...
    source = Column(Text, nullable=True)              # import batch, web form, ...
    contact_status = Column(Text, default='not_contacted')
    is_priority = Column(Boolean, default=False)      # recruiter VIP star
    created_time = Column(DateTime(timezone=True), nullable=True)  # lead source timestamp
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    # Derived
    name_score = Column(Integer, nullable=True)       # 0-40
    lead_score = Column(Integer, nullable=True)       # composite, 0-120
    lead_quality = Column(Text, nullable=True)        # High / Medium / Low / Very Low
    country = Column(Text, nullable=True)             # detected from phone
    scored_at = Column(DateTime(timezone=True), nullable=True)
