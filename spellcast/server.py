import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from spellcast.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("spellcast")

# Populated at startup
_trie = None


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        global _trie

        from spellcast.trie import load_trie
        logger.info("Loading dictionary from %s", settings.DICTIONARY_PATH)
        _trie = load_trie(str(settings.DICTIONARY_PATH), settings.MIN_WORD_LENGTH)

        yield

    application = FastAPI(title="Spellcast Solver", lifespan=lifespan)

    @application.get("/health")
    async def health():
        return {
            "status": "ok",
            "trie_loaded": _trie is not None,
            "word_count": len(_trie) if _trie is not None else 0,
        }

    @application.post("/solve")
    async def solve(request: Request):
        from spellcast.grid import Grid
        from spellcast.metrics import StageTimer
        from spellcast.search import WordSearch
        from spellcast.swaps import SolverSettings

        if _trie is None:
            raise HTTPException(503, "Dictionary not loaded")

        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(400, "Request body must be JSON")
        if not isinstance(body, dict) or not isinstance(body.get("grid"), list):
            raise HTTPException(400, "Expected a JSON object with a 'grid' list")

        timer = StageTimer()

        with timer.stage("parse"):
            try:
                rows = body["grid"]
                if not all(isinstance(row, list) for row in rows):
                    raise ValueError("grid rows must be lists")
                grid = Grid.from_rows(rows)
                solver_settings = SolverSettings.from_dict(body.get("settings"))
            except (TypeError, ValueError) as e:
                raise HTTPException(400, f"Invalid request: {e}")

        logger.info("Grid %dx%d: %r", grid.rows, grid.cols, grid)

        with timer.stage("search"):
            word_search = WordSearch(grid, _trie, solver_settings)
            # CPU-bound; keep it off the event loop
            found = await run_in_threadpool(word_search.run)

        words = found[:settings.MAX_RESULTS] if settings.MAX_RESULTS > 0 else found
        logger.info("Found %d words (returning top %d)", len(found), len(words))

        return JSONResponse({
            "words": [fw.to_dict() for fw in words],
            "word_count": len(words),
            "total_found": len(found),
            "timed_out": word_search.timed_out,
            "processing_time": timer.total_ms,
            "stage_timings": timer.summary(),
        })

    @application.get("/api/settings")
    async def api_get_settings():
        from spellcast.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from spellcast.settings import update_settings, get_editable_settings
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(400, "Request body must be JSON")
        if not isinstance(body, dict):
            raise HTTPException(400, "Expected a JSON object of setting values")
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


app = create_app()
