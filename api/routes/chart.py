"""Chart page for the rolling volatility series.

The page is a static shell; its script loads `/rolling_volatility` and draws it
with uPlot.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from core.config import VolatilityConfig, get_config

router = APIRouter(tags=["chart"])

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<title>Rolling Parkinson's Volatility</title>
<script src="https://unpkg.com/uplot/dist/uPlot.iife.min.js"></script>
<link rel="stylesheet" href="https://unpkg.com/uplot/dist/uPlot.min.css">
<style>body {{ font-family: Arial, sans-serif; text-align: center; }}</style>
</head>
<body>
<h1>{heading}</h1>
<div id="chart"></div>
<script>
function plotData() {{
    fetch('/rolling_volatility')
        .then(response => response.json())
        .then(data => {{
            let timestamps = data.map(d => d[0] / 1000);
            let volatilities = data.map(d => d[1] * 100);
            let opts = {{
                title: '{title}',
                width: 800, height: 400,
                scales: {{ x: {{ time: true }} }},
                series: [{{}}, {{ label: 'Volatility (%)', stroke: 'red', width: 2 }}]
            }};
            new uPlot(opts, [timestamps, volatilities], document.getElementById('chart'));
        }});
}}
plotData();
</script>
</body>
</html>
"""


def window_label(window: int, interval: str) -> str:
    """Describe the window length, e.g. '7-Day' for daily candles."""
    unit = "Day" if interval.strip().upper() in ("D", "1D") else "Period"
    return f"{window}-{unit}"


def render_page(config: VolatilityConfig) -> str:
    label = window_label(config.window, config.interval)
    return _PAGE_TEMPLATE.format(
        heading=f"{label} Rolling Parkinson's Volatility",
        title=f"{label} Rolling Volatility",
    )


@router.get("/", response_class=HTMLResponse)
async def serve_chart(config: VolatilityConfig = Depends(get_config)) -> HTMLResponse:
    """Serve the chart page."""
    return HTMLResponse(content=render_page(config))
