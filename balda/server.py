import logging
import random

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from balda.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("balda")


def apply_log_level():
    """DEBUG turns on the per-decision pick lines of the bots."""
    logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)


apply_log_level()


def create_app(dictionary=None) -> FastAPI:
    """Build the advisory API. Pass a loaded dictionary to skip loading DICTIONARY_PATH at startup."""
    from contextlib import asynccontextmanager

    from balda.board import Board
    from balda.errors import BaldaError
    from balda.metrics import StageTimer
    from balda.schemas import MoveOut, MoveRequest, MoveResponse, WordsRequest, WordsResponse
    from balda.search import find_longest_word, find_words
    from balda.strategies import make_strategy

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        if application.state.dictionary is None:
            from balda.dictionary import load_dictionary_file
            logger.info("Loading dictionary from %s", settings.DICTIONARY_PATH)
            application.state.dictionary = load_dictionary_file(
                str(settings.DICTIONARY_PATH), min_length=settings.MIN_WORD_LENGTH
            )
        yield

    application = FastAPI(title="Balda Engine", lifespan=lifespan)
    application.state.dictionary = dictionary

    def _board(rows) -> Board:
        try:
            return Board.from_rows(rows)
        except BaldaError as e:
            raise HTTPException(400, str(e))

    @application.get("/health")
    def health():
        loaded = application.state.dictionary
        return {"status": "ok", "dictionary_loaded": loaded is not None,
                "word_count": len(loaded) if loaded is not None else 0}

    @application.post("/move", response_model=MoveResponse)
    def suggest_move(req: MoveRequest):
        board = _board(req.board)
        try:
            strategy = make_strategy(req.strategy, rng=random.Random(settings.RANDOM_SEED))
        except BaldaError as e:
            raise HTTPException(400, str(e))

        timer = StageTimer()
        with timer.stage("choose"):
            move = strategy.choose(board, application.state.dictionary, req.player_id,
                                   frozenset(w.upper() for w in req.claimed))
        logger.info("POST /move strategy=%s size=%d -> %r", req.strategy, board.size, move)

        return MoveResponse(
            move=MoveOut(**move.to_dict()) if move is not None else None,
            board=board.snapshot(),
            elapsed_ms=timer.total_ms,
        )

    @application.post("/words", response_model=WordsResponse)
    def words(req: WordsRequest):
        board = _board(req.board)
        dictionary = application.state.dictionary
        all_words = find_words(board, dictionary, req.min_length)
        longest, path = find_longest_word(board, dictionary)
        limited = all_words[:req.limit] if req.limit > 0 else all_words
        return WordsResponse(
            words=limited,
            word_count=len(all_words),
            longest=longest,
            longest_path=[list(p) for p in path],
        )

    @application.get("/api/settings")
    def api_get_settings():
        from balda.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from balda.settings import update_settings, get_editable_settings
        body = await request.json()
        errors = update_settings(settings, **body)
        apply_log_level()
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


app = create_app()


def main():
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
