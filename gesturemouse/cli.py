from __future__ import annotations
import typer, json, asyncio, logging, threading
from rich import print
from rich.logging import RichHandler
from pathlib import Path
from typing import Optional
from .errors import AcquisitionError, ActuatorError, InitializationError
from .hand.analyzer import FrameObservation
from .fuse.state import GestureStateMachine
from .io.actuator import PyAutoGuiActuator, RecordingActuator
from .runtime.config import load_config
from .runtime.dispatch import Dispatcher
from .runtime.events import Event
from .runtime.loop import FrameLoop

app = typer.Typer(add_completion=False, help="gesturemouse CLI (gmouse)")
log = logging.getLogger("gesturemouse")

def _setup_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s",
                        datefmt="[%X]", handlers=[RichHandler(rich_tracebacks=True)], force=True)

def _event_line(frame: int, obs: FrameObservation, intents) -> str:
    return Event(frame=frame, label=obs.label, confidence=obs.confidence, intents=intents).model_dump_json()

@app.command()
def run(camera:int=typer.Option(0), width:int=640, height:int=480,
        model:str=typer.Option("./my_model/model.pt", help="TorchScript gesture classifier"),
        config:Optional[str]=typer.Option(None, help="YAML threshold overrides"),
        preview:bool=typer.Option(True, help="Show the debug window (press q to stop)"),
        dry_run:bool=typer.Option(False, help="Print intents instead of injecting input"),
        threaded:bool=typer.Option(False, help="Capture on a separate thread, keep only the newest frame"),
        ws:bool=typer.Option(False, help="Broadcast intents as JSON over WebSocket on :8765"),
        verbose:bool=False):
    """
    Live control: pinch = right-drag with ctrl held, spread = scroll.
    """
    _setup_logging(verbose)
    from .io.camera import frames
    from .io.source import observations, with_preview, Preview
    from .hand.landmarks import HandLandmarks
    from .hand.classifier import GestureClassifier

    try:
        cfg = load_config(config)
        if dry_run:
            actuator = RecordingActuator()
        else:
            actuator = PyAutoGuiActuator()
        hands = HandLandmarks()
        classifier = GestureClassifier(model)
        machine = GestureStateMachine(screen=actuator.screen_size(), config=cfg)
    except (InitializationError, ActuatorError, ValueError) as e:
        print(f"[red]Initialization failed:[/red] {e}")
        raise typer.Exit(code=1)

    view = Preview() if preview else None
    pairs = observations(frames(camera, width, height), hands, classifier)
    capture = None
    if threaded:
        from .runtime.pipeline import CaptureThread
        capture = CaptureThread(pairs)
        capture.start()
        pairs = iter(capture.slot)
    # the preview window stays on this thread, whichever thread captures
    source = with_preview(pairs, view)

    queue = None
    loop = None
    if ws:
        from .runtime.events import ws_broadcast
        loop = asyncio.new_event_loop()
        queue = asyncio.Queue()
        async def _serve():
            await ws_broadcast(queue)
        threading.Thread(target=loop.run_until_complete, args=(_serve(),), daemon=True).start()

    def on_intents(frame, obs, intents):
        line = _event_line(frame, obs, intents)
        if dry_run: typer.echo(line)
        if queue is not None: loop.call_soon_threadsafe(queue.put_nowait, line)

    driver = FrameLoop(source, machine, Dispatcher(actuator),
                       should_stop=lambda: view is not None and view.stop_requested,
                       on_intents=on_intents)
    print(f"[green]Running[/green] camera={camera} screen={machine.screen}" + (" (press q to stop)" if view else ""))
    code = 0
    try:
        code = driver.run()
    except InitializationError as e:
        print(f"[red]Initialization failed:[/red] {e}")
        code = 1
    except AcquisitionError as e:
        print(f"[red]Frame acquisition failed:[/red] {e}")
        code = 1
    except KeyboardInterrupt:
        code = 0
    finally:
        source.close()
        if capture is not None:
            capture.stop()
            log.debug("dropped %d stale frames", capture.slot.dropped)
        if view is not None:
            view.close()
    raise typer.Exit(code=code)

@app.command()
def replay(recording: Path = typer.Argument(..., exists=True, dir_okay=False),
           config:Optional[str]=typer.Option(None), screen_width:int=1920, screen_height:int=1080,
           verbose:bool=False):
    """
    Feed a JSONL recording of observations through the engine and print the resulting intents.
    """
    _setup_logging(verbose)
    try:
        cfg = load_config(config)
    except ValueError as e:
        print(f"[red]Bad config:[/red] {e}")
        raise typer.Exit(code=1)

    def source():
        with open(recording, "r") as f:
            for n, line in enumerate(f, 1):
                line = line.strip()
                if not line: continue
                try:
                    d = json.loads(line)
                    obs = FrameObservation(pts=d["pts"], label=int(d["label"]), confidence=float(d["confidence"]),
                                           width=int(d["width"]), height=int(d["height"]))
                except (ValueError, KeyError, TypeError) as e:
                    raise AcquisitionError(f"{recording}:{n}: bad observation ({e})") from e
                yield obs

    actuator = RecordingActuator(screen=(screen_width, screen_height))
    machine = GestureStateMachine(screen=actuator.screen_size(), config=cfg)
    driver = FrameLoop(source(), machine, Dispatcher(actuator),
                       on_intents=lambda frame, obs, intents: typer.echo(_event_line(frame, obs, intents)))
    try:
        code = driver.run()
    except AcquisitionError as e:
        print(f"[red]{e}[/red]")
        code = 1
    raise typer.Exit(code=code)

if __name__ == "__main__":
    app()
