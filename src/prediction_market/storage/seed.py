"""Demo markets loaded into in-memory storage at startup."""
from prediction_market.schemas import Market

_DEMO_MARKETS: list[dict] = [
    {
        "id": "1",
        "title": "Will Bitcoin exceed $150,000 by December 2026?",
        "description": (
            "This market resolves YES if Bitcoin reaches $150,000 or higher on any major "
            "exchange (Coinbase, Binance, Kraken) for at least 24 hours."
        ),
        "category": "crypto",
        "outcomes": [
            {"id": "1a", "label": "Yes", "probability": 65},
            {"id": "1b", "label": "No", "probability": 35},
        ],
        "status": "active",
        "resolution_date": "2026-12-31",
        "created_at": "2026-01-15",
        "creator_address": "aleo1qqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqq3ljyzc",
        "total_volume": 125000,
        "participant_count": 847,
    },
    {
        "id": "2",
        "title": "Will Ethereum 3.0 launch in Q1 2027?",
        "description": "Market resolves based on official Ethereum Foundation announcement of mainnet launch.",
        "category": "crypto",
        "outcomes": [
            {"id": "2a", "label": "Yes", "probability": 42},
            {"id": "2b", "label": "No", "probability": 58},
        ],
        "status": "active",
        "resolution_date": "2027-03-31",
        "created_at": "2026-01-20",
        "creator_address": "aleo1demo456xyz789abc123def456ghi789jkl012mno345pqr678stu901vwx",
        "total_volume": 89500,
        "participant_count": 623,
    },
    {
        "id": "3",
        "title": "Who will win the 2028 US Presidential Election?",
        "description": "Market resolves based on Electoral College results certified by Congress.",
        "category": "politics",
        "outcomes": [
            {"id": "3a", "label": "Democratic Candidate", "probability": 48},
            {"id": "3b", "label": "Republican Candidate", "probability": 47},
            {"id": "3c", "label": "Third Party", "probability": 5},
        ],
        "status": "active",
        "resolution_date": "2028-11-05",
        "created_at": "2026-01-10",
        "creator_address": "aleo1demo789xyz123abc456def789ghi012jkl345mno678pqr901stu234vwx",
        "total_volume": 450000,
        "participant_count": 2150,
    },
    {
        "id": "4",
        "title": "Will Apple release AR glasses in 2026?",
        "description": "Resolves YES if Apple announces consumer AR glasses this year.",
        "category": "technology",
        "outcomes": [
            {"id": "4a", "label": "Yes", "probability": 78},
            {"id": "4b", "label": "No", "probability": 22},
        ],
        "status": "active",
        "resolution_date": "2026-12-31",
        "created_at": "2026-01-18",
        "creator_address": "aleo1demo321xyz456abc789def012ghi345jkl678mno901pqr234stu567vwx",
        "total_volume": 67800,
        "participant_count": 412,
    },
    {
        "id": "5",
        "title": "Super Bowl 2027 Champion",
        "description": "Which team will win Super Bowl LXI?",
        "category": "sports",
        "outcomes": [
            {"id": "5a", "label": "Kansas City Chiefs", "probability": 18},
            {"id": "5b", "label": "San Francisco 49ers", "probability": 15},
            {"id": "5c", "label": "Philadelphia Eagles", "probability": 12},
            {"id": "5d", "label": "Other Team", "probability": 55},
        ],
        "status": "active",
        "resolution_date": "2027-02-14",
        "created_at": "2026-01-22",
        "creator_address": "aleo1demo654xyz789abc012def345ghi678jkl901mno234pqr567stu890vwx",
        "total_volume": 234000,
        "participant_count": 1580,
    },
    {
        "id": "6",
        "title": "Will the Fed cut rates below 3% by end of 2026?",
        "description": "Based on Federal Reserve official announcements.",
        "category": "finance",
        "outcomes": [
            {"id": "6a", "label": "Yes", "probability": 55},
            {"id": "6b", "label": "No", "probability": 45},
        ],
        "status": "active",
        "resolution_date": "2026-12-31",
        "created_at": "2026-01-12",
        "creator_address": "aleo1demo987xyz012abc345def678ghi901jkl234mno567pqr890stu123vwx",
        "total_volume": 178000,
        "participant_count": 934,
    },
]


def demo_markets() -> list[Market]:
    """Fresh Market objects for the demo set (ids "1" to "6")."""
    return [Market.model_validate(data) for data in _DEMO_MARKETS]
