"""
範例資料服務：載入國際賽事的範例場館、選手、賽事與成績

所有資料都經過正常的建立流程：
- 選手經過年齡 / 性別檢查
- 賽事建立時自動產生賽程
- 成績經過參賽年齡檢查
"""
from datetime import date, time
from decimal import Decimal
import logging

from sqlalchemy.orm import Session

from models import Venue
from core.catalog_manager import CatalogManager
from core.result_recorder import ResultRecorder

logger = logging.getLogger(__name__)

SAMPLE_VENUES = [
    ("National Stadium Karachi", "Karachi, Pakistan", 55000),
    ("Qaddafi Stadium", "Lahore, Pakistan", 45000),
    ("Dubai Sports City Arena", "Dubai, UAE", 60000),
    ("London Olympic Stadium", "London, England", 80000),
    ("Tokyo Aquatics Centre", "Tokyo, Japan", 15000),
    ("Melbourne Cricket Ground", "Melbourne, Australia", 100000),
    ("Khalifa International Stadium", "Doha, Qatar", 40000),
    ("Wembley Stadium", "London, England", 90000),
    ("Jawaharlal Nehru Stadium", "New Delhi, India", 75000),
    ("Stade de France", "Paris, France", 80000),
]

SAMPLE_PARTICIPANTS = [
    ("Ali Raza", "Pakistan", 22, "Male"),
    ("Sara Ahmed", "Pakistan", 19, "Female"),
    ("Kenji Tanaka", "Japan", 25, "Male"),
    ("Maria Santos", "Brazil", 21, "Female"),
    ("James Okafor", "Nigeria", 23, "Male"),
    ("Fatima Al-Rashid", "UAE", 20, "Female"),
    ("Lucas Müller", "Germany", 27, "Male"),
    ("Priya Patel", "India", 24, "Female"),
    ("Omar Abdullah", "Pakistan", 26, "Male"),
    ("Sophie Dubois", "France", 22, "Female"),
]

# (sport_type, date, time, venue 序號 1..10)
SAMPLE_EVENTS = [
    ("100m Sprint", date(2026, 3, 10), time(9, 0), 1),
    ("Swimming 200m", date(2026, 3, 10), time(11, 30), 5),
    ("Boxing Lightweight", date(2026, 3, 11), time(15, 0), 2),
    ("Long Jump", date(2026, 3, 11), time(10, 0), 4),
    ("Football Final", date(2026, 3, 12), time(18, 0), 8),
    ("Weightlifting 80kg", date(2026, 3, 12), time(13, 0), 7),
    ("Badminton Singles", date(2026, 3, 13), time(9, 30), 3),
    ("Swimming 100m", date(2026, 3, 13), time(14, 0), 5),
    ("Javelin Throw", date(2026, 3, 14), time(11, 0), 9),
    ("Tennis Singles", date(2026, 3, 14), time(16, 0), 10),
]

# (event 序號, participant 序號, score, ranking)
SAMPLE_RESULTS = [
    (1, 1, Decimal("9.85"), 1),
    (1, 3, Decimal("9.92"), 2),
    (2, 8, Decimal("107.45"), 1),
    (2, 4, Decimal("109.20"), 2),
    (3, 5, None, 1),
    (4, 7, Decimal("8.23"), 1),
    (5, 1, None, None),  # 團體賽，沒有個人分數
    (6, 9, Decimal("180.50"), 1),
    (7, 6, Decimal("21.00"), 1),
    (8, 2, Decimal("54.33"), 1),
]


def seed_sample_data(db: Session) -> bool:
    """
    載入範例資料

    參數：
        db: SQLAlchemy Session

    返回：
        True 如果有載入資料，False 如果資料庫已有場館（不重複載入）

    注意：
        - 每一筆資料各自 commit（沿用各 Manager 的 transaction）
    """
    if db.query(Venue).count() > 0:
        logger.info("Catalog already populated, skipping sample data")
        return False

    venues = [
        CatalogManager.create_venue(db, name, location, capacity)
        for name, location, capacity in SAMPLE_VENUES
    ]
    participants = [
        CatalogManager.create_participant(db, name, nationality, age, gender)
        for name, nationality, age, gender in SAMPLE_PARTICIPANTS
    ]
    events = [
        CatalogManager.create_event(db, sport_type, event_date, event_time, venues[venue_no - 1].id)[0]
        for sport_type, event_date, event_time, venue_no in SAMPLE_EVENTS
    ]

    for event_no, participant_no, score, ranking in SAMPLE_RESULTS:
        ResultRecorder.record_result(
            db,
            events[event_no - 1].id,
            participants[participant_no - 1].id,
            score=score,
            ranking=ranking
        )

    logger.info(
        f"Seeded {len(venues)} venues, {len(participants)} participants, "
        f"{len(events)} events, {len(SAMPLE_RESULTS)} results"
    )
    return True
