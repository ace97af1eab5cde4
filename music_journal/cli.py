"""
Music Journal — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Open the SQLite-backed ``RecordStore``.
  4. Execute the action (seed, add, review, report, ...).
  5. Report result to stdout.

Install and run::

    pip install -e .
    music-journal --help
    music-journal init-db
    music-journal seed
    music-journal add-album --artist "Nils Frahm" --title "Spaces" --year 2013 --genre Ambient
    music-journal review <album-id> --rating 5 --notes "Stunning live set" --tag Calm
    music-journal recommend --export
    music-journal year-stats --year 2024
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer

from music_journal.library.queries import AlbumSort
from music_journal.taxonomy.album_taxonomy import DiscoverySource, MoodTag, ReleaseType
from music_journal.utils.time_utils import today

app = typer.Typer(
    name="music-journal",
    help="Music Journal — catalog albums, review them and see your year in music.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from music_journal.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from music_journal.utils.logging import configure_logging
    configure_logging(config.logging)


def _resolve_data_path(raw: str) -> Path:
    """Resolve a configured data path against the cwd, then the project root."""
    from music_journal.config import _find_project_root

    path = Path(raw)
    if path.is_absolute() or path.exists():
        return path
    return _find_project_root() / path


@contextmanager
def _open_store(config, db_path: Optional[str] = None) -> Iterator:
    """Yield a ``RecordStore`` on the configured database (schema applied).

    A write refused because a stored collection is damaged rolls back the
    whole command and exits with code 1.
    """
    from music_journal.db.connection import get_connection
    from music_journal.db.repositories.kv_repo import KeyValueRepository
    from music_journal.db.schema import apply_schema
    from music_journal.store.record_store import RecordStore, StoreIntegrityError

    try:
        with get_connection(
            db_path or config.database.db_path,
            wal_mode=config.database.wal_mode,
            busy_timeout_ms=config.database.busy_timeout_ms,
        ) as conn:
            apply_schema(conn)
            yield RecordStore(KeyValueRepository(conn))
    except StoreIntegrityError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _require_album(store, album_id: str):
    album = store.get_album(album_id)
    if album is None:
        typer.echo(f"[ERROR] No album with id '{album_id}'.", err=True)
        raise typer.Exit(code=1)
    return album


# ── Setup commands ────────────────────────────────────────────────────────────

@app.command("init-db")
def init_db(
    db_path: Optional[str] = typer.Option(
        None,
        "--db-path",
        help="Override DB path from config (e.g. data/db/test.db).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Initialize the SQLite database and apply the schema.

    Safe to run multiple times — all DDL uses IF NOT EXISTS.
    """
    from music_journal.db.connection import get_connection
    from music_journal.db.schema import ALL_TABLE_NAMES, apply_schema

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    target_path = db_path or config.database.db_path
    typer.echo(f"Initializing database at: {target_path}")

    with get_connection(
        target_path,
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        apply_schema(conn)

    typer.echo(f"  Tables: {len(ALL_TABLE_NAMES)} created/verified.")
    typer.echo("[OK] Database ready.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Database path:     {config.database.db_path}")
    typer.echo(f"  Sample library:    {config.data.sample_library_file}")
    typer.echo(f"  Output directory:  {config.data.output_dir}")
    typer.echo(f"  Like threshold:    {config.recommendations.like_threshold}")
    typer.echo(f"  Log level:         {config.logging.level}")
    typer.echo(f"  Debug mode:        {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("seed")
def seed(
    sample_file: Optional[str] = typer.Option(
        None,
        "--file",
        help="Sample library JSON (default: [data].sample_library_file).",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Seed even if first-run setup already happened (still skips a non-empty catalog).",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Run first-run setup: load the sample library into an empty catalog."""
    from music_journal.store.seed import bootstrap, load_sample_data_if_empty

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    path = Path(sample_file) if sample_file else _resolve_data_path(
        config.data.sample_library_file
    )

    try:
        with _open_store(config) as store:
            if force:
                loaded = load_sample_data_if_empty(store, path)
                store.mark_welcome_seen()
            else:
                loaded = bootstrap(store, path)
            total = len(store.list_albums())
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    if loaded:
        typer.echo(f"[OK] Sample library loaded ({total} albums).")
    else:
        typer.echo(f"[OK] Nothing to seed ({total} albums in catalog).")


# ── Catalog commands ──────────────────────────────────────────────────────────

@app.command("add-album")
def add_album(
    artist: str = typer.Option(..., "--artist", help="Artist name."),
    title: str = typer.Option(..., "--title", help="Album title."),
    year: int = typer.Option(..., "--year", help="Release year."),
    genre: str = typer.Option(..., "--genre", help="Genre (free text)."),
    release_type: ReleaseType = typer.Option(
        ReleaseType.STUDIO, "--release-type", help="Studio, Live or Compilation."
    ),
    cover_url: str = typer.Option("", "--cover-url", help="Cover image URL."),
    song_url: Optional[str] = typer.Option(None, "--song-url", help="Link to a track."),
    discovery_source: Optional[DiscoverySource] = typer.Option(
        None, "--discovered-via", help="How you found this album."
    ),
    discovery_notes: Optional[str] = typer.Option(
        None, "--discovery-notes", help="Free-text discovery notes."
    ),
    album_id: Optional[str] = typer.Option(
        None, "--id", help="Explicit album id (default: generated)."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Add an album to the catalog (or replace one with the same --id)."""
    from pydantic import ValidationError

    from music_journal.models.album import Album, new_album_id

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        album = Album(
            id=album_id or new_album_id(),
            artist=artist,
            title=title,
            release_year=year,
            genre=genre,
            release_type=release_type,
            cover_url=cover_url,
            song_url=song_url,
            discovery_source=discovery_source,
            discovery_notes=discovery_notes,
        )
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid album: {exc}", err=True)
        raise typer.Exit(code=1)

    with _open_store(config) as store:
        store.upsert_album(album)

    typer.echo(f"[OK] Added {album.artist} - {album.title} (id: {album.id})")


@app.command("review")
def review(
    album_id: str = typer.Argument(..., help="Id of the album to review."),
    rating: int = typer.Option(..., "--rating", "-r", help="Star rating 1-5."),
    notes: str = typer.Option(..., "--notes", "-n", help="Your thoughts on the album."),
    tags: Optional[list[str]] = typer.Option(
        None,
        "--tag",
        "-t",
        help=f"Emotional tag (repeatable). Suggested: {', '.join(MoodTag)}.",
    ),
    tracks: Optional[list[str]] = typer.Option(
        None,
        "--track",
        help="Favorite track as NAME or NAME@TIMESTAMP (repeatable).",
    ),
    first_listened: Optional[str] = typer.Option(
        None, "--first-listened", help="Date you first heard it (YYYY-MM-DD)."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Write (or overwrite) the review for an album and log a listen."""
    from pydantic import ValidationError

    from music_journal.models.review import FavoriteTrack, Review

    album_id = album_id.strip()
    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    favorite_tracks = []
    for raw in tracks or []:
        name, _, position = raw.partition("@")
        favorite_tracks.append({"name": name, "timestamp": position})

    try:
        new_review = Review(
            album_id=album_id,
            rating=rating,
            personal_notes=notes,
            emotional_tags=tags or [],
            favorite_tracks=[FavoriteTrack(**t) for t in favorite_tracks],
            date_first_listened=first_listened,
        )
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid review: {exc}", err=True)
        raise typer.Exit(code=1)

    with _open_store(config) as store:
        album = _require_album(store, album_id)
        replaced = store.get_review(album_id) is not None
        store.submit_review(new_review)
        listens = store.count_listens(album_id)

    verb = "Updated" if replaced else "Saved"
    typer.echo(
        f"[OK] {verb} review of {album.artist} - {album.title}: "
        f"{new_review.rating}/5 ({listens} listen(s) logged)"
    )


@app.command("listen")
def listen(
    album_id: str = typer.Argument(..., help="Id of the album you listened to."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Log one listen of an album."""
    album_id = album_id.strip()
    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _open_store(config) as store:
        album = _require_album(store, album_id)
        store.append_listen_event(album_id)
        count = store.count_listens(album_id)

    typer.echo(f"[OK] Logged listen of {album.artist} - {album.title} ({count} total)")


@app.command("delete-album")
def delete_album(
    album_id: str = typer.Argument(..., help="Id of the album to delete."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Delete an album together with its review and listen history."""
    album_id = album_id.strip()
    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _open_store(config) as store:
        album = _require_album(store, album_id)
        if not yes:
            typer.confirm(
                f"Delete {album.artist} - {album.title} and its review/history?",
                abort=True,
            )
        store.delete_album(album_id)

    typer.echo(f"[OK] Deleted {album.artist} - {album.title}")


@app.command("list-albums")
def list_albums(
    search: str = typer.Option("", "--search", "-s", help="Match title or artist."),
    genre: Optional[str] = typer.Option(None, "--genre", help="Exact genre filter."),
    year: Optional[int] = typer.Option(None, "--year", help="Release year filter."),
    artist: Optional[str] = typer.Option(None, "--artist", help="Exact artist filter."),
    sort_by: AlbumSort = typer.Option(AlbumSort.RECENT, "--sort", help="Sort order."),
    show_filters: bool = typer.Option(
        False, "--show-filters", help="Print the genres, years and artists you can filter by."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Print the album catalog, optionally filtered and sorted."""
    from music_journal.library.queries import (
        distinct_artists,
        distinct_genres,
        distinct_years,
        filter_albums,
    )
    from music_journal.reporting.formatters import format_album_list, format_filter_values

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _open_store(config) as store:
        albums = store.list_albums()
        reviews = store.list_reviews()
        counts = {a.id: store.count_listens(a.id) for a in albums}

    if show_filters:
        typer.echo(
            format_filter_values(
                distinct_genres(albums), distinct_years(albums), distinct_artists(albums)
            )
        )
        return

    shown = filter_albums(
        albums, reviews, search=search, genre=genre, year=year, artist=artist, sort_by=sort_by
    )
    typer.echo(format_album_list(shown, reviews, listen_counts=counts))


# ── Insight commands ──────────────────────────────────────────────────────────

@app.command("recommend")
def recommend(
    export: bool = typer.Option(
        False, "--export", help="Also write JSON and CSV to [data].output_dir."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show ranked recommendations from your reviews."""
    from music_journal.library.queries import top_rated_albums, unreviewed_albums
    from music_journal.recommendations.engine import generate_recommendations
    from music_journal.reporting.export import (
        SUGGESTION_FIELDS,
        export_to_csv,
        export_to_json,
        suggestions_to_records,
    )
    from music_journal.reporting.formatters import format_recommendations

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    rec_cfg = config.recommendations

    with _open_store(config) as store:
        albums = store.list_albums()
        reviews = store.list_reviews()

    suggestions = generate_recommendations(
        albums,
        reviews,
        like_threshold=rec_cfg.like_threshold,
        max_genre_suggestions=rec_cfg.max_genre_suggestions,
        recent_window_years=rec_cfg.recent_window_years,
    )
    typer.echo(
        format_recommendations(
            suggestions,
            unreviewed=unreviewed_albums(albums, reviews),
            top_rated=top_rated_albums(albums, reviews, rec_cfg.like_threshold)[:5],
        )
    )

    if export:
        records = suggestions_to_records(suggestions)
        stem = f"recommendations_{today().isoformat()}"
        out_dir = Path(config.data.output_dir)
        json_path = export_to_json(records, out_dir / f"{stem}.json")
        csv_path = export_to_csv(records, out_dir / f"{stem}.csv", SUGGESTION_FIELDS)
        typer.echo("")
        typer.echo(f"[OK] Exported: {json_path}")
        typer.echo(f"[OK] Exported: {csv_path}")


@app.command("year-stats")
def year_stats(
    year: Optional[str] = typer.Option(
        None, "--year", help="Calendar year (default: current year)."
    ),
    list_years: bool = typer.Option(
        False, "--list-years", help="Only print the years that have reviews."
    ),
    export: bool = typer.Option(
        False, "--export", help="Also write JSON and CSV to [data].output_dir."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show your year in music: totals, top albums, genres and monthly activity."""
    from music_journal.reporting.export import (
        export_to_csv,
        export_to_json,
        year_stats_to_dict,
        year_stats_to_records,
    )
    from music_journal.reporting.formatters import format_year_stats
    from music_journal.stats.year_in_music import available_years, compute_year_stats

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _open_store(config) as store:
        albums = store.list_albums()
        reviews = store.list_reviews()
        events = store.list_listen_events()

    if list_years:
        typer.echo("  ".join(str(y) for y in available_years(reviews)))
        return

    target = year if year is not None else today().year
    try:
        stats = compute_year_stats(
            albums,
            reviews,
            events,
            target,
            top_rated_limit=config.stats.top_rated_limit,
            most_listened_limit=config.stats.most_listened_limit,
            top_genres_limit=config.stats.top_genres_limit,
        )
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_year_stats(stats))

    if export:
        out_dir = Path(config.data.output_dir)
        stem = f"year_in_music_{stats.year}"
        json_path = export_to_json(year_stats_to_dict(stats), out_dir / f"{stem}.json")
        csv_path = export_to_csv(year_stats_to_records(stats), out_dir / f"{stem}.csv")
        typer.echo("")
        typer.echo(f"[OK] Exported: {json_path}")
        typer.echo(f"[OK] Exported: {csv_path}")


if __name__ == "__main__":
    app()
