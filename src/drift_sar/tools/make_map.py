from __future__ import annotations

import argparse
import json
from pathlib import Path


PATH_COLOR = "#3498db"
PREDICTED_COLOR = "#e74c3c"
SEARCH_COLOR = "#e67e22"


def _heat_color(intensity: float) -> str:
    # yellow (low) -> red (modal cell)
    g = int(round(220 * (1.0 - max(0.0, min(1.0, intensity)))))
    return f"#ff{g:02x}00"


def render_html(run: dict) -> str:
    result = run.get("result") or {}
    paths = result.get("driftPaths") or []
    heat = result.get("heatmapPoints") or []
    predicted = result.get("predictedPoints") or []
    if not paths or not paths[0]:
        raise ValueError("Run has no drift paths")

    start = paths[0][0]
    cells = [
        {"lat": c["lat"], "lng": c["lng"], "intensity": c["intensity"], "color": _heat_color(c["intensity"])}
        for c in heat
    ]
    radius_m = float(run.get("searchRadiusKm") or 5.0) * 1000.0
    title = f"Drift estimate: {run.get('subjectId', '')}"

    return f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>{title}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <link rel="stylesheet" href="https://unpkg.com/leaflet@1.9.4/dist/leaflet.css" />
  <style>
    body {{ margin: 0; font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; }}
    #map {{ height: 100vh; width: 100vw; }}
  </style>
</head>
<body>
<div id="map"></div>
<script src="https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"></script>
<script>
  const start = {json.dumps(start)};
  const paths = {json.dumps(paths)};
  const cells = {json.dumps(cells)};
  const predicted = {json.dumps(predicted)};

  const map = L.map('map');

  L.tileLayer('https://{{s}}.tile.openstreetmap.org/{{z}}/{{x}}/{{y}}.png', {{
    maxZoom: 18,
    attribution: '&copy; OpenStreetMap contributors'
  }}).addTo(map);

  // sampled trajectories
  paths.forEach((p) => {{
    L.polyline(p.map(q => [q.lat, q.lng]), {{ color: '{PATH_COLOR}', weight: 1, opacity: 0.25 }}).addTo(map);
  }});

  // heatmap cells
  cells.forEach((c) => {{
    L.circle([c.lat, c.lng], {{ radius: 55, stroke: false, fillColor: c.color, fillOpacity: 0.2 + 0.6 * c.intensity }})
      .addTo(map).bindPopup(`Intensity ${{c.intensity.toFixed(2)}}`);
  }});

  // most likely position per hour
  predicted.forEach((p, idx) => {{
    L.circleMarker([p.lat, p.lng], {{ radius: 6, color: '{PREDICTED_COLOR}' }})
      .addTo(map).bindPopup(`Hour ${{idx + 1}}<br/>${{p.lat.toFixed(5)}}, ${{p.lng.toFixed(5)}}`);
  }});

  L.marker([start.lat, start.lng]).addTo(map).bindPopup('Last known position');

  const center = predicted.length ? predicted[predicted.length - 1] : start;
  const area = L.circle([center.lat, center.lng], {{ radius: {radius_m}, color: '{SEARCH_COLOR}', fill: false, dashArray: '6 6' }}).addTo(map);

  map.fitBounds(area.getBounds().extend([start.lat, start.lng]).pad(0.2));
</script>
</body>
</html>
"""


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--run", default="runs/last_run.json")
    ap.add_argument("--out", default="runs/last_run_map.html")
    args = ap.parse_args()

    run_path = Path(args.run)
    out_path = Path(args.out)

    run = json.loads(run_path.read_text(encoding="utf-8"))
    try:
        html = render_html(run)
    except ValueError as e:
        raise SystemExit(f"{e}: {run_path}")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(html, encoding="utf-8")
    print(f"Wrote: {out_path.resolve()}")


if __name__ == "__main__":
    main()
