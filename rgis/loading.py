"""Jobs and systems that turn load requests into new layers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Union

from .events import (
    LOAD_FILE_EVENTS,
    CreateLayerEvent,
    EventQueue,
    LoadFileFromBytes,
    LoadFileFromNetwork,
)
from .features import FeatureCollection
from .fileloader import FileFormat, load_file
from .network import FetchedFile, NetworkFetchJob
from .projected import Unprojected

_log = logging.getLogger(__name__)


@dataclass
class LoadFileJobOutcome:
    """A loaded feature collection ready to become a layer."""

    feature_collection: Unprojected[FeatureCollection]
    name: str
    source_crs_epsg_code: int


@dataclass
class LoadFileJob:
    """Parse file contents of a known format."""

    file_format: FileFormat
    data: bytes
    name: str
    source_crs_epsg_code: int

    def description(self) -> str:
        return f"Loading {self.file_format.display_name()} file"

    def perform(self) -> LoadFileJobOutcome:
        """Load the file; raises LoadError when it cannot be parsed."""
        return LoadFileJobOutcome(
            feature_collection=Unprojected(load_file(self.file_format, self.data)),
            name=self.name,
            source_crs_epsg_code=self.source_crs_epsg_code,
        )


Job = Union[NetworkFetchJob, LoadFileJob]


def handle_fetched_file(events: EventQueue, outcome: Union[FetchedFile, BaseException]) -> None:
    """Queue a fetched file for loading as GeoJSON, or log the fetch failure."""
    if isinstance(outcome, BaseException):
        _log.error("Could not fetch file: %r", outcome)
        return
    events.send(
        LoadFileFromBytes(
            file_name=outcome.name,
            file_format=FileFormat.GEOJSON,
            data=outcome.data,
            crs_epsg_code=outcome.crs_epsg_code,
        )
    )


def handle_loaded_file(
    events: EventQueue, outcome: Union[LoadFileJobOutcome, BaseException]
) -> None:
    """Request a layer for a loaded file, or log the load failure."""
    if isinstance(outcome, BaseException):
        _log.error("Encountered error when loading file: %r", outcome)
        return
    events.send(
        CreateLayerEvent(
            feature_collection=outcome.feature_collection,
            name=outcome.name,
            source_crs_epsg_code=outcome.source_crs_epsg_code,
        )
    )


def handle_load_file_events(events: EventQueue) -> List[Job]:
    """Drain load requests and return the jobs to run for them, in order."""
    jobs: List[Job] = []
    for event in events.drain(LOAD_FILE_EVENTS):
        if isinstance(event, LoadFileFromNetwork):
            jobs.append(
                NetworkFetchJob(url=event.url, crs_epsg_code=event.crs_epsg_code, name=event.name)
            )
        else:
            jobs.append(
                LoadFileJob(
                    file_format=event.file_format,
                    data=event.data,
                    name=event.file_name,
                    source_crs_epsg_code=event.crs_epsg_code,
                )
            )
    return jobs