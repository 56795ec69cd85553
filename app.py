# app.py
"""
Coastline Viewer: draw an island or country outline at the current map center

Type a Japanese island (本州, 佐渡島, ...) or a country (日本, フランス, ...) and
its coastline from OpenStreetMap Nominatim is moved onto the middle of the map,
so shapes can be compared at the same spot.
- Countries keep only their largest landmass.
- The red pin marks where the last search was placed.
"""

import streamlit as st
from streamlit_folium import st_folium

from coastline_viewer.config import Settings, configure_logging
from coastline_viewer.controller import OverlayController, StatusKind
from coastline_viewer.geolocation import BrowserGeolocator
from coastline_viewer.lookup import PlaceLookupClient
from coastline_viewer.map_view import FoliumMapView

# --------------------------
# Config
# --------------------------
st.set_page_config(page_title="Coastline Viewer", layout="wide")

MAP_KEY = "coastline_map"
INPUT_KEY = "place_name"

st.title("海岸線ビューア")
st.markdown(
    """
島名または国名を入力すると、その海岸線を**現在の地図の中心**に重ねて表示します。
国の場合は最も大きい陸地（メインランド）のみを表示します。
"""
)

# =========================
# Session state
# =========================
def get_controller() -> OverlayController:
    if "controller" not in st.session_state:
        settings = Settings.load()
        configure_logging(settings.log_level)
        map_view = FoliumMapView(settings)
        geolocator = BrowserGeolocator()
        st.session_state["map_view"] = map_view
        st.session_state["geolocator"] = geolocator
        st.session_state["controller"] = OverlayController(
            settings,
            map_view=map_view,
            lookup_client=PlaceLookupClient(settings),
            geolocator=geolocator,
        )
        st.session_state["locating"] = False
    return st.session_state["controller"]


controller = get_controller()
map_view: FoliumMapView = st.session_state["map_view"]
geolocator: BrowserGeolocator = st.session_state["geolocator"]

# The map component keeps its last reported viewport under its key.
map_view.sync_viewport(st.session_state.get(MAP_KEY))


def on_clear() -> None:
    controller.clear()
    st.session_state[INPUT_KEY] = ""


def on_locate() -> None:
    geolocator.new_request()
    st.session_state["locating"] = True


# =========================
# UI
# =========================
col1, col2 = st.columns([2, 1])

with col1:
    with st.form("search_form", clear_on_submit=False):
        place_name = st.text_input(
            "国名または島名",
            key=INPUT_KEY,
            placeholder="例: 本州, 佐渡島, 日本, フランス",
        )
        # Enter inside the form submits it.
        search_btn = st.form_submit_button("表示", type="primary")

    b1, b2 = st.columns(2)
    with b1:
        st.button("クリア", on_click=on_clear, use_container_width=True)
    with b2:
        st.button("現在地", on_click=on_locate, use_container_width=True)

with col2:
    st.header("使い方")
    st.markdown(
        """
**対応している名前**
- 日本の主な島: 本州, 北海道, 九州, 四国, 沖縄, 佐渡島, 淡路島 など
- 国名: 日本, アメリカ, イギリス, フランス, 中国 など
- その他の名前は英語名としてそのまま検索します

**ヒント**
- 地図を動かしてから検索すると、その中心に海岸線が表示されます
- 何度も検索すると形を重ねて比較できます
"""
    )
    st.info("Data © OpenStreetMap contributors (Nominatim).")

# =========================
# Processing
# =========================
if search_btn:
    with st.spinner("海岸線データを読み込み中..."):
        controller.search(place_name)

if st.session_state.get("locating"):
    status = controller.locate()
    if status.kind is not StatusKind.LOCATING:
        st.session_state["locating"] = False

# =========================
# Outputs
# =========================
status = controller.status
if status.is_error:
    st.error(status.message)
else:
    st.success(status.message)

m = map_view.build_map()
st_folium(
    m,
    key=MAP_KEY,
    height=600,
    use_container_width=True,
    returned_objects=["center", "zoom"],
)

if controller.overlays:
    st.markdown("### ダウンロード")
    d1, d2, d3 = st.columns(3)
    with d1:
        st.download_button(
            "海岸線 (GeoJSON)",
            data=map_view.overlays_geojson().encode("utf-8"),
            file_name="coastlines.geojson",
            mime="application/geo+json",
        )
    with d2:
        st.download_button(
            "海岸線 (KML)",
            data=map_view.overlays_kml().encode("utf-8"),
            file_name="coastlines.kml",
            mime="application/vnd.google-earth.kml+xml",
        )
    with d3:
        try:
            st.download_button(
                "地図 (HTML)",
                data=map_view.map_html(),
                file_name="coastline_map.html",
                mime="text/html",
            )
        except Exception as e:
            st.warning(f"Could not prepare HTML map download: {e}")
