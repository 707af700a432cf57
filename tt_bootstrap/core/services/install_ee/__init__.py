"""
Tarantool Enterprise bundle discovery — package re-exports.

    from tt_bootstrap.core.services.install_ee import fetch_versions, download_bundle

Layers, leaves first: queue → links → fetch → crawler → versions →
download, with credentials and host detection feeding them.
"""

from tt_bootstrap.core.services.install_ee.credentials import (  # noqa: F401
    get_creds,
    get_creds_from_env,
    get_creds_from_file,
)
from tt_bootstrap.core.services.install_ee.crawler import (  # noqa: F401
    EE_SOURCE,
    collect_bundle_references,
    seed_prefixes,
)
from tt_bootstrap.core.services.install_ee.download import (  # noqa: F401
    bundle_url,
    download_bundle,
)
from tt_bootstrap.core.services.install_ee.errors import (  # noqa: F401
    BundleWriteError,
    CorruptedCredentialsError,
    CredentialsFileError,
    EEError,
    HttpError,
    NoCredentialsError,
    NoPackagesError,
    OsDetectionError,
    PreconditionError,
    TransportError,
    VersionParseError,
)
from tt_bootstrap.core.services.install_ee.fetch import Credentials  # noqa: F401
from tt_bootstrap.core.services.install_ee.links import SearchOptions  # noqa: F401
from tt_bootstrap.core.services.install_ee.versions import (  # noqa: F401
    compile_version_regexp,
    fetch_versions,
    fetch_versions_local,
    get_short_version_from_bundle_name,
    get_versions,
)
