"""Weather Search - Streamlit Frontend."""

import asyncio

import httpx
import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

from observability import init_tracing
from src.agents.query_orchestrator.history import HistoryPresenter
from src.agents.query_orchestrator.orchestrator import QueryOrchestrator
from src.tools.api_tools.map_api.map_api import MAP_HEIGHT
from src.tools.shared_libraries.config import get_http_timeout, get_server_url, tracing_enabled
from src.tools.shared_libraries.errors import ValidationError
from src.tools.shared_libraries.schemas import SearchType

load_dotenv()

st.set_page_config(
    page_title="Consulta del Tiempo",
    page_icon="🌦️",
    layout="centered",
)

if "tracing" not in st.session_state:
    st.session_state.tracing = tracing_enabled()
    if st.session_state.tracing:
        init_tracing(project_name="weather-search-ui")


def show(placeholder, content: str) -> None:
    """Replace the result area with new content."""
    if "<iframe" in content:
        with placeholder.container():
            components.html(content, height=MAP_HEIGHT + 60, scrolling=True)
    else:
        placeholder.markdown(content, unsafe_allow_html=True)


async def run_search(search_type: SearchType, city: str, server_url: str, placeholder) -> None:
    async with httpx.AsyncClient(timeout=get_http_timeout()) as client:
        orchestrator = QueryOrchestrator(
            client,
            server_url=server_url,
            display=lambda content: show(placeholder, content),
        )
        try:
            await orchestrator.run(search_type, city)
        except ValidationError:
            return
        # asyncio.run cancels whatever is still pending when it returns
        await orchestrator.drain()


async def run_history(server_url: str, placeholder) -> None:
    async with httpx.AsyncClient(timeout=get_http_timeout()) as client:
        presenter = HistoryPresenter(
            client,
            server_url=server_url,
            display=lambda content: show(placeholder, content),
        )
        await presenter.show()


# Sidebar
with st.sidebar:
    st.header("⚙️ Configuración")
    server_url = st.text_input("Servidor del historial", value=get_server_url())

st.title("Consulta del Tiempo")

city = st.text_input("Localidad", key="city_input", placeholder="Madrid")

col1, col2, col3, col4 = st.columns(4)
with col1:
    current_clicked = st.button("Tiempo Actual", use_container_width=True)
with col2:
    forecast_clicked = st.button("Pronóstico 15 Días", use_container_width=True)
with col3:
    map_clicked = st.button("Mapa", use_container_width=True)
with col4:
    history_clicked = st.button("Historial", use_container_width=True)

st.divider()
result_area = st.empty()

if current_clicked:
    asyncio.run(run_search(SearchType.CURRENT, city, server_url, result_area))
elif forecast_clicked:
    asyncio.run(run_search(SearchType.FORECAST, city, server_url, result_area))
elif map_clicked:
    asyncio.run(run_search(SearchType.MAP, city, server_url, result_area))
elif history_clicked:
    asyncio.run(run_history(server_url, result_area))
