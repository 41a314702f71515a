from __future__ import annotations

from pathlib import Path

import pytest

from tariff_dashboard.config import Settings

HS6_CSV = """importer,exporter,hs6,date_eff,tariffs,importsvaluein1000usd,affected_trade_value,affected_trade_share,affected_hs6tariff_line_share,action
USA,China,010121,2024-01-01,10,1,500,1,1,EO 14257
USA,China,010121,2024-01-01,20,3,0,0,0,
USA,Mexico,010129,1/2/2024,5,2,0,0,0,
Canada,China,010121,2024-01-02,8,1,0,0,0,
USA,China,010121,not a date,99,1,0,0,0,
"""

ISIC_CSV = """importer,exporter,isic4_2,date_eff,tariffs,importsvaluein1000usd,affected_trade_value,affected_trade_share,affected_hs6tariff_line_share
USA,China,4100,2024-01-01,2,0.1,100,50,0.2
USA,China,41,2024-01-01,10,0.3,0,0.25,40
USA,Mexico,5,2024-01-02,4,1,0,0,0
"""


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    (tmp_path / "hs6tariff.csv").write_text(HS6_CSV, encoding="utf-8")
    (tmp_path / "isic2tariff.csv").write_text(ISIC_CSV, encoding="utf-8")
    (tmp_path / "exporters.csv").write_text("exporter\nMexico\nChina\n China \n\n", encoding="utf-8")
    (tmp_path / "isic4_2_product_name.csv").write_text("isic4_2,name\n4100,Utilities\n41,Utilities\n5,Mining\n", encoding="utf-8")
    (tmp_path / "hs6code.csv").write_text("hs6code\n010129\n010121\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(data_dir: Path) -> Settings:
    return Settings(
        data_dir=data_dir,
        exporters_file="exporters.csv",
        isic_codes_file="isic4_2_product_name.csv",
        hs6_codes_file="hs6code.csv",
        isic_tariff_file="isic2tariff.csv",
        hs6_tariff_file="hs6tariff.csv",
        trade_value_scale=1000.0,
        log_level="INFO",
    )
