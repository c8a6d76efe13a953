from dashboard.constants import TREND_LINE_COLOR

GRID_COLOR = "rgba(55, 65, 81, 0.1)"
AXIS_TEXT_COLOR = "#9CA3AF"


def apply_common_plot_style(fig, title, height=250):
    fig.update_layout(
        title=title,
        height=height,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=40, r=20, t=40, b=30),
        showlegend=False,
        xaxis=dict(
            showgrid=False,
            tickfont=dict(color=AXIS_TEXT_COLOR, size=12),
            zeroline=False,
        ),
        yaxis=dict(
            showgrid=True,
            gridcolor=GRID_COLOR,
            griddash="dash",
            tickfont=dict(color=AXIS_TEXT_COLOR, size=12),
            zeroline=False,
        ),
    )
    return fig


def category_bar_chart(series, title="By Category"):
    """Bar per category, colored by the color the backend assigned."""
    import plotly.graph_objects as go

    if not series:
        return None
    fig = go.Figure(
        data=go.Bar(
            x=[item["label"] for item in series],
            y=[item["value"] for item in series],
            marker=dict(color=[item.get("color") for item in series]),
            hovertemplate="%{x}: $%{y:.2f}<extra></extra>",
        )
    )
    return apply_common_plot_style(fig, title)


def trend_line_chart(series, title="Expense Trend", color=TREND_LINE_COLOR):
    import plotly.graph_objects as go

    if not series:
        return None
    labels = [point["label"] for point in series]
    fig = go.Figure(
        data=go.Scatter(
            x=labels,
            y=[point["value"] for point in series],
            mode="lines+markers",
            line=dict(color=color, width=3, shape="spline"),
            marker=dict(size=8, color=color),
            hovertemplate="%{x}: $%{y:.2f}<extra></extra>",
        )
    )
    apply_common_plot_style(fig, title)
    # Keep the order the backend produced; plotly would otherwise sort labels.
    fig.update_xaxes(categoryorder="array", categoryarray=labels, type="category")
    return fig


def format_currency(value):
    return f"${float(value or 0):,.2f}"
