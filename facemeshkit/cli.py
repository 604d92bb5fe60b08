from __future__ import annotations
import typer, json, asyncio
from rich.console import Console
from pathlib import Path
from typing import Iterator, Optional
from .config import ConfigError, OverlayConfig, load_config
from .face.analysis import analyze_detection
from .face.frame import first_face
from .log import get_logger, setup_logging
from .render.svg import to_svg
from .runtime.pipeline import OverlayPipeline

app = typer.Typer(add_completion=False, help="facemeshkit CLI (fmk)")
console = Console(stderr=True)
log = get_logger(__name__)

@app.callback()
def main(log_level: str = typer.Option("WARNING", help="DEBUG, INFO, WARNING, ERROR")):
    setup_logging(log_level)

def _config(path: Optional[Path]) -> OverlayConfig:
    try:
        return load_config(path)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

def _lines(path: Path) -> Iterator[str]:
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if line.strip(): yield line

@app.command()
def replay(frames: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSONL of detector results"),
           width: float = typer.Option(..., help="render surface width"),
           height: float = typer.Option(..., help="render surface height"),
           config: Optional[Path] = typer.Option(None),
           detector_width: Optional[float] = typer.Option(None),
           detector_height: Optional[float] = typer.Option(None),
           svg_dir: Optional[Path] = typer.Option(None, help="write one SVG per frame here")):
    """
    Run recorded detector results through the overlay pipeline and print one
    FrameResult JSON per line.
    """
    pipe = OverlayPipeline(_config(config))
    if (detector_width is None) != (detector_height is None):
        raise typer.BadParameter("give both --detector-width and --detector-height, or neither")
    if detector_width and detector_height:
        pipe.set_detector_resolution(detector_width, detector_height)
    if pipe.scaler.detector is None:
        console.print("[yellow]No detector resolution configured; every frame is unscalable[/yellow]")
    if svg_dir: svg_dir.mkdir(parents=True, exist_ok=True)
    faults = 0
    for i, line in enumerate(_lines(frames)):
        # parse inside the detector call so a bad line is handled as a detector fault
        res = pipe.step(lambda: first_face(json.loads(line)), width, height)
        faults += sum(1 for e in res.events if e.type == "detector_fault")
        typer.echo(res.model_dump_json())
        if svg_dir:
            (svg_dir / f"frame_{i:05d}.svg").write_text(to_svg(res.primitives, width, height))
    console.print(f"[green]done[/green] state={pipe.state.value} faults={faults}")

@app.command()
def analyze(frames: Path = typer.Argument(..., exists=True, dir_okay=False)):
    """Print a landmark completeness report for each recorded detector result."""
    for i, line in enumerate(_lines(frames)):
        try:
            result = json.loads(line)
            analysis = analyze_detection(result if isinstance(result, dict) else None)
        except (json.JSONDecodeError, AttributeError, TypeError) as e:
            log.warning("line %d: malformed detector result (%s)", i + 1, e)
            continue
        typer.echo(analysis.model_dump_json())

@app.command()
def live(camera: Optional[int] = typer.Option(0), width: int = 1280, height: int = 720,
         preview_width: Optional[int] = typer.Option(None), preview_height: Optional[int] = typer.Option(None),
         config: Optional[Path] = typer.Option(None), ws: bool = typer.Option(False, help="broadcast FrameResults over WebSocket"),
         host: str = "0.0.0.0", port: int = 8765):
    """
    Live preview: camera -> FaceMesh -> overlay. The camera frame is the detector
    space, the preview window is the render surface. Press q to quit.
    """
    import cv2
    from .face.detector import FaceMeshDetector
    from .io.camera import frames
    from .render.draw import draw_primitives
    from .runtime.events import ws_broadcast

    pipe = OverlayPipeline(_config(config))
    det = FaceMeshDetector()
    queue: "asyncio.Queue[str]" = asyncio.Queue()

    async def producer():
        for f in frames(camera, width, height):
            img = f.image; w, h = f.size
            if pipe.scaler.detector is None:
                pipe.set_detector_resolution(w, h)
            pw, ph = preview_width or w, preview_height or h
            res = pipe.step(lambda: det(img), pw, ph)
            view = cv2.resize(img, (pw, ph)) if (pw, ph) != (w, h) else img.copy()
            draw_primitives(view, res.primitives)
            status = "Face Detected" if pipe.session.face_detected else "No Face"
            cv2.putText(view, status, (20, 40), cv2.FONT_HERSHEY_SIMPLEX, 0.8, (255, 255, 255), 2)
            if res.face:
                for j, text in enumerate(res.face.lines()):
                    cv2.putText(view, text, (20, 80 + 24*j), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1)
            for ev in res.events:
                console.print(f"[cyan]{ev.type}[/cyan]")
            cv2.imshow("facemeshkit", view)
            if ws: await queue.put(res.model_dump_json())
            await asyncio.sleep(0)
            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

    async def run():
        if ws:
            bcast = asyncio.create_task(ws_broadcast(queue, host, port))
            try:
                await producer()
            finally:
                bcast.cancel()
        else:
            await producer()

    try:
        asyncio.run(run())
    finally:
        det.close()
        cv2.destroyAllWindows()

if __name__ == "__main__":
    app()
