"""Squad builder page for selecting and saving a gameweek squad."""

import logging
from typing import Optional

import streamlit as st

from ...analysis import (
    AthleteFilter,
    CandidateError,
    EditResult,
    extract_teams,
    filter_athletes,
)
from ...config import Settings
from ...models import Athlete, Position
from ...services import (
    ApiClient,
    CatalogProvider,
    GameweekService,
    ServiceError,
    SessionError,
    SquadGateway,
    SquadSession,
    create_sample_athletes,
)
from ..components import render_athlete_table, render_squad_status, render_validation


logger = logging.getLogger(__name__)

DEFAULT_GAMEWEEK_ID = 1


def _init_session_state(settings: Settings) -> None:
    """Initialize session state variables."""
    if "session" not in st.session_state:
        client = ApiClient.from_settings(settings)
        st.session_state.gameweek_service = GameweekService(client)
        st.session_state.session = SquadSession(
            user_id=settings.user_id,
            catalog=CatalogProvider(client),
            gateway=SquadGateway(client),
            budget_cap=settings.budget_cap,
        )
        st.session_state.data_source = "unknown"
        st.session_state.notices = []
        _load_catalog()
    if "validation" not in st.session_state:
        st.session_state.validation = None


def _notify(level: str, message: str) -> None:
    """Queue a message for the next render."""
    st.session_state.notices.append((level, message))


def _render_notices() -> None:
    for level, message in st.session_state.notices:
        getattr(st, level)(message)
    st.session_state.notices = []


def _load_catalog() -> None:
    """Load athletes from the API with fallback to sample data."""
    session: SquadSession = st.session_state.session
    try:
        session.load_catalog()
        st.session_state.data_source = "api"
    except ServiceError as e:
        logger.warning("Falling back to sample athletes: %s", e)
        session.use_catalog(create_sample_athletes())
        st.session_state.data_source = "sample"


def _refresh_catalog() -> None:
    st.session_state.session.catalog_provider.client.clear_cache()
    _load_catalog()


def _load_gameweek_ids() -> tuple[list[int], Optional[int]]:
    """Known gameweek ids and the current one, empty if unavailable."""
    service: GameweekService = st.session_state.gameweek_service
    try:
        gameweeks = service.list_gameweeks()
    except ServiceError:
        return [], None
    current = next((g.id for g in gameweeks if g.is_current), None)
    return [g.id for g in gameweeks], current


def _open_gameweek(gameweek_id: int) -> None:
    """Load the squad for a gameweek; the previous draft is discarded."""
    session: SquadSession = st.session_state.session
    st.session_state.validation = None
    if st.session_state.data_source == "sample":
        session.start_empty(gameweek_id)
        return
    try:
        session.open_gameweek(gameweek_id)
    except ServiceError as e:
        _notify("error", f"Failed to load squad: {e}")
    except CandidateError as e:
        _notify("error", f"Could not load your saved squad: {e}")


def _draft_matches(session: SquadSession, gameweek_id: int) -> bool:
    return session.has_draft and session.builder.gameweek_id == gameweek_id


def _report(result: EditResult) -> None:
    if not result.ok:
        _notify("error", result.message or "That change is not allowed.")


def _add_athlete(athlete: Athlete) -> None:
    _report(st.session_state.session.builder.add_athlete(athlete))


def _remove_athlete(athlete_id: int) -> None:
    _report(st.session_state.session.builder.remove_athlete(athlete_id))


def _toggle_starter(athlete_id: int) -> None:
    _report(st.session_state.session.builder.toggle_starter(athlete_id))


def _set_captain(athlete_id: int) -> None:
    _report(st.session_state.session.builder.set_captain(athlete_id))


def _set_vice_captain(athlete_id: int) -> None:
    _report(st.session_state.session.builder.set_vice_captain(athlete_id))


def _generate_random() -> None:
    """Replace the draft with a random squad from the server."""
    session: SquadSession = st.session_state.session
    try:
        validation = session.generate_random()
    except CandidateError as e:
        _notify("warning", str(e))
        return
    except (ServiceError, SessionError) as e:
        _notify("error", f"Failed to generate random squad: {e}")
        return

    st.session_state.validation = validation
    _notify("success", "Random squad generated! Review and save when ready.")


def _save_squad() -> None:
    """Validate and save the draft."""
    session: SquadSession = st.session_state.session
    try:
        result = session.save()
    except ServiceError as e:
        _notify("error", f"Failed to save squad. Please try again. ({e})")
        return

    st.session_state.validation = result.validation
    if result.saved:
        _notify("success", "Squad saved successfully!")


def render() -> None:
    """Render the squad builder page."""
    settings = Settings.from_env()
    if settings.user_id is None:
        st.warning("Set FANTASY_USER_ID to build a squad.")
        st.stop()

    _init_session_state(settings)
    session: SquadSession = st.session_state.session

    st.title("Squad Builder")

    # Data source indicator
    source = st.session_state.data_source
    col1, col2 = st.columns([3, 1])
    with col1:
        if source == "api":
            st.success(f"Using live data ({len(session.athletes)} players)")
        elif source == "sample":
            st.warning("Using sample data (API unavailable)")
    with col2:
        st.button("Refresh Data", on_click=_refresh_catalog)

    # Gameweek selection
    gameweek_ids, current = _load_gameweek_ids()
    if not gameweek_ids:
        gameweek_ids = [session.selected_gameweek_id or DEFAULT_GAMEWEEK_ID]
    default = session.selected_gameweek_id or current or gameweek_ids[0]
    gameweek_id = st.selectbox(
        "Gameweek",
        gameweek_ids,
        index=gameweek_ids.index(default) if default in gameweek_ids else 0,
        format_func=lambda g: f"Gameweek {g}",
    )
    if not _draft_matches(session, gameweek_id):
        _open_gameweek(gameweek_id)

    _render_notices()

    if not _draft_matches(session, gameweek_id):
        st.info("Squad not loaded yet. Reload the page to retry.")
        return

    st.divider()

    team_col, players_col = st.columns([1, 1.5])

    with team_col:
        st.header("Your Squad")
        builder = session.builder
        render_squad_status(builder.draft, builder.summary)

        if builder.draft.athletes:
            for position in Position:
                athletes = [a for a in builder.draft.athletes if a.position == position]
                if athletes:
                    st.subheader(f"{position.display_name} ({len(athletes)})")
                    for athlete in athletes:
                        _render_squad_row(athlete)
        else:
            st.info("No players in squad yet. Add players from the list on the right.")

        st.divider()
        button_col1, button_col2 = st.columns(2)
        with button_col1:
            st.button(
                "🎲 Generate Random Squad",
                on_click=_generate_random,
                disabled=source != "api",
            )
        with button_col2:
            st.button("Save Squad", type="primary", on_click=_save_squad, disabled=source != "api")

        if st.session_state.validation is not None:
            render_validation(st.session_state.validation)

    with players_col:
        st.header("Available Players")
        criteria = _render_filters(session.athletes)
        filtered = _filter_athletes(session, criteria)
        selected_ids = set(builder.draft.athlete_ids)
        available = [a for a in filtered if a.id not in selected_ids]
        render_athlete_table(available, builder.draft, on_add=_add_athlete)


def _render_squad_row(athlete: Athlete) -> None:
    """Render an athlete row in the squad section."""
    draft = st.session_state.session.builder.draft
    is_starter = draft.is_starter(athlete.id)

    cols = st.columns([3, 1, 1, 1, 1])

    with cols[0]:
        badges = ""
        if draft.captain_id == athlete.id:
            badges += " (C)"
        elif draft.vice_captain_id == athlete.id:
            badges += " (V)"
        label = f"**{athlete.name}**{badges}"
        st.markdown(label if is_starter else f"_{label}_")
        st.caption(f"{athlete.team_label} · £{athlete.cost:.1f}m")

    with cols[1]:
        st.button(
            "ST" if is_starter else "Bench",
            key=f"starter_{athlete.id}",
            on_click=_toggle_starter,
            args=(athlete.id,),
            help="Remove from starters" if is_starter else "Add to starters",
        )

    with cols[2]:
        st.button(
            "C",
            key=f"captain_{athlete.id}",
            on_click=_set_captain,
            args=(athlete.id,),
            disabled=draft.captain_id == athlete.id,
            help="Set as captain",
        )

    with cols[3]:
        st.button(
            "V",
            key=f"vice_{athlete.id}",
            on_click=_set_vice_captain,
            args=(athlete.id,),
            disabled=draft.vice_captain_id == athlete.id,
            help="Set as vice-captain",
        )

    with cols[4]:
        st.button("🗑️", key=f"remove_{athlete.id}", on_click=_remove_athlete, args=(athlete.id,), help="Remove player")


def _render_filters(athletes: list[Athlete]) -> AthleteFilter:
    """Render filter widgets and return the chosen criteria."""
    search = st.text_input("Search", placeholder="Search players by name...")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        position_name = st.selectbox(
            "Position", ["All"] + [p.display_name for p in Position], key="position_filter"
        )
    with col2:
        teams = extract_teams(athletes)
        team_labels = {label: team_id for team_id, label in teams}
        team_name = st.selectbox("Team", ["All"] + list(team_labels), key="team_filter")
    with col3:
        min_cost = st.number_input("Min Cost (£m)", min_value=0.0, value=0.0, step=0.5)
    with col4:
        max_cost = st.number_input("Max Cost (£m)", min_value=0.0, value=0.0, step=0.5)

    return AthleteFilter(
        search=search,
        position=next((p for p in Position if p.display_name == position_name), None),
        team_id=team_labels.get(team_name),
        min_cost=min_cost or None,
        max_cost=max_cost or None,
    )


def _filter_athletes(session: SquadSession, criteria: AthleteFilter) -> list[Athlete]:
    """Filter on the server when possible, locally otherwise; most expensive first."""
    if st.session_state.data_source != "api" or not criteria.has_remote_criteria:
        filtered = filter_athletes(session.athletes, criteria)
    else:
        try:
            filtered = session.catalog_provider.search_athletes(criteria)
        except ServiceError as e:
            logger.warning("Player search failed, filtering locally: %s", e)
            filtered = filter_athletes(session.athletes, criteria)
    return sorted(filtered, key=lambda a: a.cost, reverse=True)
