"""
Integration tests for the editor API
"""

import asyncio
import threading
import time

from api.routers import editor as editor_router
from core.image.converters import from_base64
from core.image.generators import create_checkerboard, create_stripe_pattern
from effects import SEPIA, BaseEffect


class TestLoadEndpoints:
    """Test loading images"""

    def test_state_when_empty(self, client):
        response = client.get("/api/editor/state")

        assert response.status_code == 200
        data = response.json()
        assert data["loaded"] is False
        assert data["size"] is None
        assert data["undo_depth"] == 0

    def test_load_rainbow(self, client):
        response = client.post(
            "/api/editor/load/rainbow", json={"width": 140, "height": 70, "horizontal": True}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["state"]["size"] == {"width": 140, "height": 70}
        assert data["state"]["undo_depth"] == 1

        thumbnail = from_base64(data["thumbnail_base64"])
        assert thumbnail.width == 64

    def test_load_checkerboard(self, client):
        response = client.post("/api/editor/load/checkerboard", json={"tile_size": 4})

        assert response.status_code == 200
        assert response.json()["state"]["size"] == {"width": 32, "height": 32}

    def test_load_rainbow_invalid_size(self, client):
        response = client.post("/api/editor/load/rainbow", json={"width": 0, "height": 10})

        assert response.status_code == 422

    def test_load_rejects_unknown_fields(self, client):
        response = client.post(
            "/api/editor/load/checkerboard", json={"tile_size": 4, "color": "red"}
        )

        assert response.status_code == 422

    def test_load_file(self, client, image_store, gradient_image):
        image_store.write(gradient_image, "in.png")

        response = client.post("/api/editor/load/file", json={"file_path": "in.png"})

        assert response.status_code == 200
        assert response.json()["state"]["size"] == {"width": 8, "height": 6}

    def test_load_missing_file(self, client):
        response = client.post("/api/editor/load/file", json={"file_path": "missing.png"})

        assert response.status_code == 404

    def test_load_corrupt_file(self, client, tmp_path):
        (tmp_path / "bad.png").write_bytes(b"junk")

        response = client.post("/api/editor/load/file", json={"file_path": "bad.png"})

        assert response.status_code == 500
        assert response.json()["type"] == "ImageIOError"


class TestEffectEndpoints:
    """Test applying effects and stepping through history"""

    def test_effect_without_image(self, client):
        response = client.post("/api/editor/effect", json={"effect": "blur"})

        assert response.status_code == 409
        assert response.json()["type"] == "IllegalState"

    def test_apply_effect(self, client, editor_service):
        client.post("/api/editor/load/checkerboard", json={"tile_size": 2})

        response = client.post("/api/editor/effect", json={"effect": "sepia"})

        assert response.status_code == 200
        data = response.json()
        assert data["state"]["pending_effect"] == "Sepia"
        assert data["state"]["undo_depth"] == 2
        assert editor_service.output_image() == SEPIA.apply(create_checkerboard(2))

    def test_unknown_effect(self, client):
        response = client.post("/api/editor/effect", json={"effect": "emboss"})

        assert response.status_code == 422

    def test_mosaic_requires_seeds(self, client):
        client.post("/api/editor/load/checkerboard", json={"tile_size": 2})

        response = client.post("/api/editor/effect", json={"effect": "mosaic"})

        assert response.status_code == 422

    def test_mosaic_seed_range(self, client):
        response = client.post("/api/editor/effect", json={"effect": "mosaic", "seeds": 15001})

        assert response.status_code == 422

    def test_mosaic(self, client):
        client.post("/api/editor/load/checkerboard", json={"tile_size": 2})

        response = client.post(
            "/api/editor/effect", json={"effect": "mosaic", "seeds": 5, "rng_seed": 1}
        )

        assert response.status_code == 200
        assert response.json()["state"]["pending_effect"] == "MosaicClusterer"

    def test_mosaic_over_budget(self, client, editor_service):
        editor_service.max_mosaic_work = 10
        client.post("/api/editor/load/checkerboard", json={"tile_size": 2})

        response = client.post("/api/editor/effect", json={"effect": "mosaic", "seeds": 5})

        assert response.status_code == 413
        assert response.json()["type"] == "BudgetExceeded"

    def test_undo_redo(self, client):
        client.post("/api/editor/load/checkerboard", json={"tile_size": 2})
        client.post("/api/editor/effect", json={"effect": "blur"})

        response = client.post("/api/editor/undo")
        assert response.status_code == 200
        assert response.json()["state"]["redo_depth"] == 1

        response = client.post("/api/editor/redo")
        assert response.status_code == 200
        assert response.json()["state"]["undo_depth"] == 2

    def test_undo_to_empty_then_fail(self, client):
        client.post("/api/editor/load/checkerboard", json={"tile_size": 2})

        response = client.post("/api/editor/undo")
        assert response.status_code == 200
        assert response.json()["state"]["loaded"] is False
        assert response.json()["thumbnail_base64"] is None

        assert client.post("/api/editor/undo").status_code == 409
        assert client.get("/api/editor/image").status_code == 409

    def test_redo_with_nothing_undone(self, client):
        client.post("/api/editor/load/checkerboard", json={"tile_size": 2})

        assert client.post("/api/editor/redo").status_code == 409


class TestOutputEndpoints:
    """Test image export, save and scripts"""

    def test_get_image(self, client):
        client.post("/api/editor/load/rainbow", json={"width": 100, "height": 20})

        response = client.get("/api/editor/image")

        assert response.status_code == 200
        data = response.json()
        assert data["width"] == 100
        assert from_base64(data["image_base64"]) == create_stripe_pattern(100, 20)

    def test_save(self, client, image_store, tmp_path):
        client.post("/api/editor/load/checkerboard", json={"tile_size": 3})

        response = client.post("/api/editor/save", json={"file_path": "board.bmp"})

        assert response.status_code == 200
        assert response.json()["file_path"] == str(tmp_path / "board.bmp")
        assert image_store.read("board.bmp") == create_checkerboard(3)

    def test_save_without_image(self, client):
        response = client.post("/api/editor/save", json={"file_path": "out.png"})

        assert response.status_code == 409

    def test_run_script(self, client, image_store):
        script = "// demo\nload checkerboard 2\nsepia\nsave s.png\n"

        response = client.post("/api/editor/script", json={"script": script})

        assert response.status_code == 200
        data = response.json()
        assert data["commands_executed"] == 3
        assert data["state"]["pending_effect"] == "Sepia"
        assert image_store.read("s.png") == SEPIA.apply(create_checkerboard(2))

    def test_run_bad_script(self, client):
        response = client.post("/api/editor/script", json={"script": "blur"})

        assert response.status_code == 422
        data = response.json()
        assert data["type"] == "ScriptError"
        assert data["details"]["line_number"] == 1

    def test_script_line_limit(self, client):
        script = "load checkerboard 1\n" + "blur\n" * 60

        response = client.post("/api/editor/script", json={"script": script})

        assert response.status_code == 422
        assert response.json()["type"] == "ScriptError"


class TestRequestModels:
    def test_effect_request_to_dict(self):
        from common.enums import EffectType
        from schemas import EffectRequest

        request = EffectRequest(effect=EffectType.MOSAIC, seeds=100)

        assert request.to_dict() == {"effect": "mosaic", "seeds": 100}


class _SlowEffect(BaseEffect):
    """Effect that holds the editor lock for a while"""

    def __init__(self, started: threading.Event, delay: float):
        super().__init__()
        self.started = started
        self.delay = delay

    def apply(self, image):
        self.started.set()
        time.sleep(self.delay)
        return image


def _call_beside_slow_effect(editor_service, make_call, delay=0.5):
    """
    Start a slow effect in a thread, then await an endpoint on an event loop
    with a heartbeat task. Returns the endpoint result and the longest gap
    between heartbeats.
    """
    started = threading.Event()
    worker = threading.Thread(target=editor_service.apply, args=(_SlowEffect(started, delay),))
    worker.start()
    assert started.wait(timeout=5)

    async def scenario():
        gaps = []
        stop = asyncio.Event()

        async def heartbeat():
            last = time.perf_counter()
            while not stop.is_set():
                await asyncio.sleep(0.01)
                now = time.perf_counter()
                gaps.append(now - last)
                last = now

        beat = asyncio.create_task(heartbeat())
        await asyncio.sleep(0)
        result = await make_call()
        stop.set()
        await beat
        return result, max(gaps)

    try:
        return asyncio.run(scenario())
    finally:
        worker.join(timeout=5)


class TestConcurrentRequests:
    """Test that a running effect does not stall other requests"""

    def test_state_waits_without_blocking_loop(self, editor_service, uniform_image):
        editor_service.load_image(uniform_image)

        state, longest_gap = _call_beside_slow_effect(
            editor_service, lambda: editor_router.get_state(editor=editor_service)
        )

        assert longest_gap < 0.25
        assert state.undo_depth == 2
        assert state.pending_effect == "_SlowEffect"

    def test_undo_waits_without_blocking_loop(self, editor_service, uniform_image):
        editor_service.load_image(uniform_image)

        response, longest_gap = _call_beside_slow_effect(
            editor_service,
            lambda: editor_router.undo(editor=editor_service, thumbnail_width=64),
        )

        assert longest_gap < 0.25
        assert response.state.undo_depth == 1
        assert response.state.redo_depth == 1
        assert response.thumbnail_base64 is not None
