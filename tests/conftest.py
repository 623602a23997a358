"""
Pytest configuration and fixtures
"""

import io
import tarfile
from pathlib import Path
from typing import AsyncGenerator, Callable, Dict

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from core.database import create_session_factory


ORGANIZATIONS_CSV = """Index,Organization Id,Name,Website,Country,Description,Founded,Industry,Number of employees
1,FAB0d41d5b5d22c,Ferrell LLC,https://price.net/,Papua New Guinea,Horizontal empowering knowledgebase,1990,Plastics,3498
2,6A7EdDEA9FaDC52,"Mckinney, Riley and Day",http://www.hall-buchanan.info/,Finland,User-centric system-worthy leverage,2015,Glass / Ceramics / Concrete,4952
3,0bFED1ADAE4bcC1,Hester Ltd,http://sullivan-reed.com/,China,Switchable scalable moratorium,1971,Public Safety,5287
"""

CUSTOMERS_CSV = """Index,Customer Id,First Name,Last Name,Company,City,Country,Phone 1,Phone 2,Email,Subscription Date,Website
1,DD37Cf93aecA6Dc,Sheryl,Baxter,Rasmussen Group,East Leonard,Chile,229.077.5154,397.884.0519x718,zunigavanessa@smith.info,2020-08-24,http://www.stephenson.com/
2,1Ef7b82A4CAAD10,Preston,Lozano,Vega-Gentry,East Jimmychester,Djibouti,5153435776,686-620-1820x944,vmata@colon.com,2021-04-23,http://www.hobbs.com/
3,6F94879bDAfE5a6,Roy,Berry,Murillo-Perry,Isabelborough,Antigua and Barbuda,+1-539-402-0259,(496)978-3969x58947,beckycarr@hogan.com,2020-03-25,http://www.lawrence.com/
4,5Cef8BFA16c5e3c,Linda,Olsen,"Dominguez, Mcmillan and Donovan",Bensonview,Dominican Republic,001-808-617-6467x12895,+1-813-324-8756,stanleyblackwell@benson.org,2020-06-02,http://www.good-lyons.com/
5,053d585Ab6b3159,Joanna,Bender,"Martin, Lang and Andrade",West Priscilla,Slovakia (Slovak Republic),001-234-203-0635x76146,001-199-446-3860x3486,colinalvarado@miles.net,2021-04-17,https://goodwin-ingram.com/
"""


def build_tar_gz(files: Dict[str, str]) -> bytes:
    """Build a .tar.gz archive in memory from {member path: text content}"""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        for name, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(name)
            info.size = len(data)
            archive.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


@pytest.fixture
def make_tar_gz() -> Callable[[Dict[str, str]], bytes]:
    return build_tar_gz


@pytest.fixture
def organizations_csv() -> str:
    return ORGANIZATIONS_CSV


@pytest.fixture
def customers_csv() -> str:
    return CUSTOMERS_CSV


@pytest.fixture
def dump_archive_bytes() -> bytes:
    """A dump archive with the organizations and customers CSV files"""
    return build_tar_gz({
        "dump/organizations.csv": ORGANIZATIONS_CSV,
        "dump/customers.csv": CUSTOMERS_CSV,
    })


@pytest.fixture
def write_csv(tmp_path) -> Callable[[str, str], Path]:
    """Write CSV text to a file under tmp_path and return its path"""
    def _write(content: str, name: str = "data.csv") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Engine on a fresh SQLite file"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite'}",
        echo=False,
    )

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Session factory bound to the test engine"""
    return create_session_factory(test_engine)
