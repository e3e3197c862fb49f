"""Squad status component showing budget and composition."""

import streamlit as st

from ...analysis import SquadSummary, get_available_slots_for_team, get_position_shortfall
from ...models import MAX_PER_TEAM, POSITION_MINIMUMS, SQUAD_SIZE, STARTER_COUNT, DraftSquad


def render_squad_status(draft: DraftSquad, summary: SquadSummary) -> None:
    """
    Render squad status metrics.

    Args:
        draft: The draft to display status for.
        summary: Figures derived after the last edit.
    """
    budget_pct = summary.cost_used / draft.budget_cap if draft.budget_cap else 0.0

    st.metric(
        label="Budget",
        value=f"£{summary.budget_remaining:.1f}m",
        delta=f"£{summary.cost_used:.1f}m / £{draft.budget_cap:g}m used",
        delta_color="off",
    )
    st.progress(min(budget_pct, 1.0))

    col1, col2 = st.columns(2)
    with col1:
        st.metric(label="Players", value=f"{summary.selected_count} / {SQUAD_SIZE}")
    with col2:
        st.metric(label="Starters", value=f"{summary.starter_count} / {STARTER_COUNT}")

    # Position breakdown
    shortfall = get_position_shortfall(draft)
    counts = draft.position_counts
    with st.expander("Position breakdown", expanded=False):
        for position, minimum in POSITION_MINIMUMS.items():
            col1, col2 = st.columns([3, 1])
            with col1:
                st.progress(
                    min(counts[position] / minimum, 1.0),
                    text=f"{position.display_name}: {counts[position]}/{minimum}",
                )
            with col2:
                if shortfall[position]:
                    st.caption(f"{shortfall[position]} needed")
                else:
                    st.caption("Done")

    # Team breakdown
    with st.expander("Team breakdown", expanded=False):
        teams = {a.team_id: a.team_label for a in draft.athletes}
        if not teams:
            st.caption("No players selected yet.")
        for team_id, label in sorted(teams.items(), key=lambda item: item[1]):
            count = draft.team_counts[team_id]
            slots = get_available_slots_for_team(draft, team_id)
            col1, col2 = st.columns([3, 1])
            with col1:
                st.progress(min(count / MAX_PER_TEAM, 1.0), text=f"{label}: {count}/{MAX_PER_TEAM}")
            with col2:
                st.caption("Full" if slots == 0 else f"{slots} left")
