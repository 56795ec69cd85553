"""Japanese display names for islands and countries, mapped to search terms."""

import enum
from dataclasses import dataclass
from typing import Dict


class PlaceCategory(str, enum.Enum):
    ISLAND = "island"
    COUNTRY = "country"
    UNKNOWN = "unknown"


# Main islands of Japan. Short spellings are accepted alongside the full ones.
ISLAND_NAMES: Dict[str, str] = {
    "本州": "Honshu",
    "北海道": "Hokkaido",
    "九州": "Kyushu",
    "四国": "Shikoku",
    "沖縄本島": "Okinawa Island",
    "沖縄": "Okinawa Island",
    "佐渡島": "Sado Island",
    "佐渡": "Sado Island",
    "淡路島": "Awaji Island",
    "淡路": "Awaji Island",
    "対馬": "Tsushima",
    "壱岐": "Iki",
    "種子島": "Tanegashima",
    "屋久島": "Yakushima",
    "奄美大島": "Amami Oshima",
    "石垣島": "Ishigaki Island",
    "宮古島": "Miyako Island",
}

COUNTRY_NAMES: Dict[str, str] = {
    "日本": "Japan",
    "アメリカ": "United States",
    "アメリカ合衆国": "United States",
    "米国": "United States",
    "イギリス": "United Kingdom",
    "英国": "United Kingdom",
    "フランス": "France",
    "ドイツ": "Germany",
    "イタリア": "Italy",
    "スペイン": "Spain",
    "カナダ": "Canada",
    "中国": "China",
    "韓国": "South Korea",
    "北朝鮮": "North Korea",
    "ロシア": "Russia",
    "オーストラリア": "Australia",
    "ブラジル": "Brazil",
    "インド": "India",
    "メキシコ": "Mexico",
    "アルゼンチン": "Argentina",
    "エジプト": "Egypt",
    "南アフリカ": "South Africa",
    "タイ": "Thailand",
    "ベトナム": "Vietnam",
    "フィリピン": "Philippines",
    "インドネシア": "Indonesia",
    "マレーシア": "Malaysia",
    "シンガポール": "Singapore",
    "ニュージーランド": "New Zealand",
    "トルコ": "Turkey",
    "ギリシャ": "Greece",
    "ポーランド": "Poland",
    "オランダ": "Netherlands",
    "ベルギー": "Belgium",
    "スイス": "Switzerland",
    "オーストリア": "Austria",
    "スウェーデン": "Sweden",
    "ノルウェー": "Norway",
    "デンマーク": "Denmark",
    "フィンランド": "Finland",
    "ポルトガル": "Portugal",
    "チェコ": "Czech Republic",
    "ハンガリー": "Hungary",
    "ルーマニア": "Romania",
    "ウクライナ": "Ukraine",
    "サウジアラビア": "Saudi Arabia",
    "イラン": "Iran",
    "イラク": "Iraq",
    "イスラエル": "Israel",
    "チリ": "Chile",
    "ペルー": "Peru",
    "コロンビア": "Colombia",
    "ベネズエラ": "Venezuela",
    "アイスランド": "Iceland",
    "グリーンランド": "Greenland",
}


@dataclass(frozen=True)
class NamedPlace:
    display_name: str
    english: str
    category: PlaceCategory

    @property
    def search_query(self) -> str:
        # Island names alone are ambiguous worldwide.
        if self.category is PlaceCategory.ISLAND:
            return f"{self.english} Japan"
        return self.english

    @property
    def is_mainland_only(self) -> bool:
        return self.category is not PlaceCategory.ISLAND


def translate_name(name: str) -> NamedPlace:
    """
    Resolve a display name to an English search term.

    Islands are checked before countries; anything else is passed through
    unchanged on the assumption that it is already an English name.
    """
    if name in ISLAND_NAMES:
        return NamedPlace(name, ISLAND_NAMES[name], PlaceCategory.ISLAND)
    if name in COUNTRY_NAMES:
        return NamedPlace(name, COUNTRY_NAMES[name], PlaceCategory.COUNTRY)
    return NamedPlace(name, name, PlaceCategory.UNKNOWN)
