"""Turning stored project rows into search documents."""

from __future__ import annotations

import calendar
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from modindex.search import UploadSearchProject

logger = logging.getLogger(__name__)

_OSI_APPROVED = frozenset(
    """
    0BSD AAL AFL-1.1 AFL-1.2 AFL-2.0 AFL-2.1 AFL-3.0 AGPL-3.0 AGPL-3.0-only
    AGPL-3.0-or-later APL-1.0 APSL-1.0 APSL-1.1 APSL-1.2 APSL-2.0 Apache-1.1
    Apache-2.0 Artistic-1.0 Artistic-1.0-Perl Artistic-1.0-cl8 Artistic-2.0
    BSD-1-Clause BSD-2-Clause BSD-2-Clause-Patent BSD-3-Clause BSD-3-Clause-LBNL
    BSL-1.0 CAL-1.0 CAL-1.0-Combined-Work-Exception CATOSL-1.1 CDDL-1.0
    CECILL-2.1 CERN-OHL-P-2.0 CERN-OHL-S-2.0 CERN-OHL-W-2.0 CNRI-Python CPAL-1.0
    CPL-1.0 CUA-OPL-1.0 ECL-1.0 ECL-2.0 EFL-1.0 EFL-2.0 EPL-1.0 EPL-2.0
    EUDatagrid EUPL-1.1 EUPL-1.2 Entessa Fair Frameworx-1.0 GPL-2.0 GPL-2.0+
    GPL-2.0-only GPL-2.0-or-later GPL-3.0 GPL-3.0+ GPL-3.0-only GPL-3.0-or-later
    GPL-3.0-with-GCC-exception HPND IPA IPL-1.0 ISC Intel LGPL-2.0 LGPL-2.0+
    LGPL-2.0-only LGPL-2.0-or-later LGPL-2.1 LGPL-2.1+ LGPL-2.1-only
    LGPL-2.1-or-later LGPL-3.0 LGPL-3.0+ LGPL-3.0-only LGPL-3.0-or-later LPL-1.0
    LPL-1.02 LPPL-1.3c LiLiQ-P-1.1 LiLiQ-R-1.1 LiLiQ-Rplus-1.1 MIT MIT-0
    MIT-Modern-Variant MPL-1.0 MPL-1.1 MPL-2.0 MPL-2.0-no-copyleft-exception
    MS-PL MS-RL MirOS Motosoto MulanPSL-2.0 Multics NASA-1.3 NCSA NGPL NPOSL-3.0
    NTP Naumen Nokia OCLC-2.0 OFL-1.1 OFL-1.1-RFN OFL-1.1-no-RFN OGTSL OLDAP-2.8
    OSET-PL-2.1 OSL-1.0 OSL-2.0 OSL-2.1 OSL-3.0 PHP-3.0 PHP-3.01 PostgreSQL
    Python-2.0 QPL-1.0 RPL-1.1 RPL-1.5 RPSL-1.0 RSCPL SISSL SPL-1.0 SimPL-2.0
    Sleepycat UCL-1.0 UPL-1.0 Unicode-DFS-2016 Unlicense VSL-1.0 W3C Watcom-1.0
    Xnet ZPL-2.0 ZPL-2.1 Zlib eCos-2.0 jabberpl wxWindows
    """.split()
)


@dataclass(kw_only=True)
class ProjectRow:
    """A searchable project as loaded from storage, with its aggregated lists."""

    project_id: str
    project_type_name: str
    title: str
    description: str
    downloads: int
    follows: int
    icon_url: str | None = None
    published: datetime
    approved: datetime | None = None
    updated: datetime
    license: str
    slug: str | None = None
    color: int | None = None
    client_side_type: str
    server_side_type: str
    username: str
    categories: list[str] | None = None
    additional_categories: list[str] | None = None
    loaders: list[str] | None = None
    versions: list[str] | None = None
    gallery: list[str] | None = None
    featured_gallery: list[str] | None = field(default=None)


def _timestamp(moment: datetime) -> int:
    return calendar.timegm(moment.utctimetuple())


def project_document_from_row(row: ProjectRow) -> UploadSearchProject:
    """Build the search document for one project row."""
    categories = list(row.categories or []) + list(row.loaders or [])
    display_categories = list(categories)
    categories.extend(row.additional_categories or [])

    versions = list(row.versions or [])
    license_id = row.license.split(" ")[0]
    created = row.approved if row.approved is not None else row.published
    featured = row.featured_gallery or []

    return UploadSearchProject(
        project_id=row.project_id,
        project_type=row.project_type_name,
        slug=row.slug,
        author=row.username,
        title=row.title,
        description=row.description,
        categories=categories,
        display_categories=display_categories,
        latest_version=versions[-1] if versions else "None",
        versions=versions,
        follows=row.follows,
        downloads=row.downloads,
        icon_url=row.icon_url or "",
        license=license_id,
        client_side=row.client_side_type,
        server_side=row.server_side_type,
        gallery=list(row.gallery or []),
        featured_gallery=featured[0] if featured else None,
        date_created=created,
        created_timestamp=_timestamp(created),
        date_modified=row.updated,
        modified_timestamp=_timestamp(row.updated),
        open_source=license_id in _OSI_APPROVED,
        color=row.color & 0xFFFFFFFF if row.color is not None else None,
    )


def index_local(rows: Iterable[ProjectRow]) -> list[UploadSearchProject]:
    """Build search documents for every stored project row."""
    logger.info("Indexing local projects!")
    return [project_document_from_row(row) for row in rows]