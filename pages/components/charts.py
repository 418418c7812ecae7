"""Chart components using Plotly for data visualization."""

import pandas as pd
import plotly.express as px


def leaderboard_frame(entries: list) -> pd.DataFrame:
    """Leaderboard entries as a table with Rank, Name, Username and Points columns."""
    return pd.DataFrame(
        [
            {"Rank": e.rank, "Name": e.name, "Username": e.username, "Points": e.points}
            for e in entries
        ],
        columns=["Rank", "Name", "Username", "Points"],
    )


def create_leaderboard_chart(entries: list, top: int = 10):
    """Create horizontal bar chart of the top point earners.

    Args:
        entries: LeaderboardEntry list, already ranked
        top: How many users to show (default 10)

    Returns:
        Plotly figure
    """
    df = leaderboard_frame(entries[:top])

    fig = px.bar(
        df,
        x="Points",
        y="Name",
        orientation="h",
        title=f"Top {min(top, len(df))} Players",
        color="Points",
        color_continuous_scale="Blues",
    )
    fig.update_layout(yaxis={"categoryorder": "total ascending"}, coloraxis_showscale=False)

    return fig
