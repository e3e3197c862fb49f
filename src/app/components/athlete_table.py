"""Athlete table component for displaying and selecting athletes."""

from typing import Callable, Optional

import streamlit as st

from ...models import SQUAD_SIZE, Athlete, DraftSquad


def render_athlete_table(
    athletes: list[Athlete],
    draft: DraftSquad,
    on_add: Optional[Callable[[Athlete], None]] = None,
) -> None:
    """
    Render a table of athletes with add buttons.

    Args:
        athletes: Athletes to display.
        draft: Current draft, used to disable buttons when the squad is full.
        on_add: Callback when an athlete is added.
    """
    if not athletes:
        st.info("No players found matching your filters.")
        return

    for athlete in athletes:
        _render_athlete_row(athlete, draft, on_add)


def _render_athlete_row(
    athlete: Athlete,
    draft: DraftSquad,
    on_add: Optional[Callable[[Athlete], None]] = None,
) -> None:
    """Render a single athlete row."""
    cols = st.columns([3, 1, 1])

    with cols[0]:
        st.markdown(f"**{athlete.name}**")
        st.caption(f"{athlete.team_label} · {athlete.position.abbreviation}")

    with cols[1]:
        st.markdown(f"**£{athlete.cost:.1f}m**")

    with cols[2]:
        if on_add is not None:
            full = draft.squad_size >= SQUAD_SIZE
            st.button(
                "➕",
                key=f"add_{athlete.id}",
                disabled=full,
                help="Squad is full! Remove a player first." if full else None,
                on_click=on_add,
                args=(athlete,),
            )

    st.divider()
