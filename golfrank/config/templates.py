"""重みテンプレートのマスターデータ

コース類型（POWER / TECHNICAL / BALANCED）と会場別に調整した重み。
形式は WeightConfiguration.from_dict が読み込むテンプレート辞書。
会場テンプレートの負の重みは「小さいほど良い」指標を表し、読み込み時に絶対値になる。
"""

# 全テンプレート共通のグループ構成
GROUP_NAMES: tuple[str, ...] = (
    "Driving Performance",
    "Approach - Short (<100)",
    "Approach - Mid (100-150)",
    "Approach - Long (150-200)",
    "Approach - Very Long (>200)",
    "Putting",
    "Around the Green",
    "Scoring",
    "Course Management",
)


def _w(value: float) -> dict[str, float]:
    return {"weight": value}


ARCHETYPE_TEMPLATES: dict[str, dict] = {
    "POWER": {
        "name": "POWER",
        "archetype": "POWER",
        "description": "飛距離重視コース向け（Driving Distance 相関 0.37）",
        "groupWeights": {
            "Driving Performance": 0.130,
            "Approach - Short (<100)": 0.145,
            "Approach - Mid (100-150)": 0.180,
            "Approach - Long (150-200)": 0.150,
            "Approach - Very Long (>200)": 0.030,
            "Putting": 0.120,
            "Around the Green": 0.080,
            "Scoring": 0.110,
            "Course Management": 0.055,
        },
        "metricWeights": {
            "Driving Performance": {
                "Driving Distance": _w(0.404),
                "Driving Accuracy": _w(0.123),
                "SG OTT": _w(0.472),
            },
            "Approach - Short (<100)": {
                "Approach <100 GIR": _w(0.14),
                "Approach <100 SG": _w(0.33),
                "Approach <100 Prox": _w(0.53),
            },
            "Approach - Mid (100-150)": {
                "Approach <150 FW GIR": _w(0.12),
                "Approach <150 FW SG": _w(0.32),
                "Approach <150 FW Prox": _w(0.56),
                "Approach <150 Rough GIR": _w(0.12),
                "Approach <150 Rough SG": _w(0.32),
                "Approach <150 Rough Prox": _w(0.56),
            },
            "Approach - Long (150-200)": {
                "Approach <200 FW GIR": _w(0.11),
                "Approach <200 FW SG": _w(0.30),
                "Approach <200 FW Prox": _w(0.59),
                "Approach >150 Rough GIR": _w(0.11),
                "Approach >150 Rough SG": _w(0.30),
                "Approach >150 Rough Prox": _w(0.59),
            },
            "Approach - Very Long (>200)": {
                "Approach >200 FW GIR": _w(0.10),
                "Approach >200 FW SG": _w(0.25),
                "Approach >200 FW Prox": _w(0.65),
            },
            "Putting": {"SG Putting": _w(1.0)},
            "Around the Green": {"SG Around Green": _w(1.0)},
            "Scoring": {
                "SG T2G": _w(0.20),
                "Scoring Average": _w(0.10),
                "Birdie Chances Created": _w(0.10),
                "Scoring: Approach <100 SG": _w(0.15),
                "Scoring: Approach <150 FW SG": _w(0.15),
                "Scoring: Approach <150 Rough SG": _w(0.15),
                "Scoring: Approach <200 FW SG": _w(0.05),
                "Scoring: Approach >200 FW SG": _w(0.00),
                "Scoring: Approach >150 Rough SG": _w(0.10),
            },
            "Course Management": {
                "Scrambling": _w(0.12),
                "Great Shots": _w(0.08),
                "Poor Shot Avoidance": _w(0.08),
                "Course Management: Approach <100 Prox": _w(0.10),
                "Course Management: Approach <150 FW Prox": _w(0.10),
                "Course Management: Approach <150 Rough Prox": _w(0.15),
                "Course Management: Approach >150 Rough Prox": _w(0.20),
                "Course Management: Approach <200 FW Prox": _w(0.12),
                "Course Management: Approach >200 FW Prox": _w(0.05),
            },
        },
    },
    "TECHNICAL": {
        "name": "TECHNICAL",
        "archetype": "TECHNICAL",
        "description": "精度重視コース向け（Distance 0.06, Accuracy 0.25, Around Green 0.33）",
        "groupWeights": {
            "Driving Performance": 0.065,
            "Approach - Short (<100)": 0.148,
            "Approach - Mid (100-150)": 0.185,
            "Approach - Long (150-200)": 0.167,
            "Approach - Very Long (>200)": 0.037,
            "Putting": 0.107,
            "Around the Green": 0.125,
            "Scoring": 0.097,
            "Course Management": 0.069,
        },
        "metricWeights": {
            "Driving Performance": {
                "Driving Distance": _w(0.086),
                "Driving Accuracy": _w(0.354),
                "SG OTT": _w(0.560),
            },
            "Approach - Short (<100)": {
                "Approach <100 GIR": _w(0.09),
                "Approach <100 SG": _w(0.32),
                "Approach <100 Prox": _w(0.59),
            },
            "Approach - Mid (100-150)": {
                "Approach <150 FW GIR": _w(0.09),
                "Approach <150 FW SG": _w(0.29),
                "Approach <150 FW Prox": _w(0.62),
                "Approach <150 Rough GIR": _w(0.09),
                "Approach <150 Rough SG": _w(0.29),
                "Approach <150 Rough Prox": _w(0.62),
            },
            "Approach - Long (150-200)": {
                "Approach <200 FW GIR": _w(0.08),
                "Approach <200 FW SG": _w(0.27),
                "Approach <200 FW Prox": _w(0.65),
                "Approach >150 Rough GIR": _w(0.08),
                "Approach >150 Rough SG": _w(0.27),
                "Approach >150 Rough Prox": _w(0.65),
            },
            "Approach - Very Long (>200)": {
                "Approach >200 FW GIR": _w(0.08),
                "Approach >200 FW SG": _w(0.22),
                "Approach >200 FW Prox": _w(0.70),
            },
            "Putting": {"SG Putting": _w(1.0)},
            "Around the Green": {"SG Around Green": _w(1.0)},
            "Scoring": {
                "SG T2G": _w(0.18),
                "Scoring Average": _w(0.12),
                "Birdie Chances Created": _w(0.10),
                "Scoring: Approach <100 SG": _w(0.083),
                "Scoring: Approach <150 FW SG": _w(0.298),
                "Scoring: Approach <150 Rough SG": _w(0.298),
                "Scoring: Approach <200 FW SG": _w(0.448),
                "Scoring: Approach >200 FW SG": _w(0.056),
                "Scoring: Approach >150 Rough SG": _w(0.056),
            },
            "Course Management": {
                "Scrambling": _w(0.12),
                "Great Shots": _w(0.08),
                "Poor Shot Avoidance": _w(0.08),
                "Course Management: Approach <100 Prox": _w(0.068),
                "Course Management: Approach <150 FW Prox": _w(0.121),
                "Course Management: Approach <150 Rough Prox": _w(0.121),
                "Course Management: Approach >150 Rough Prox": _w(0.364),
                "Course Management: Approach <200 FW Prox": _w(0.023),
                "Course Management: Approach >200 FW Prox": _w(0.023),
            },
        },
    },
    "BALANCED": {
        "name": "BALANCED",
        "archetype": "BALANCED",
        "description": "バランス型コース向け（Accuracy 0.35, SG Approach 0.56）",
        "groupWeights": {
            "Driving Performance": 0.090,
            "Approach - Short (<100)": 0.148,
            "Approach - Mid (100-150)": 0.190,
            "Approach - Long (150-200)": 0.160,
            "Approach - Very Long (>200)": 0.035,
            "Putting": 0.115,
            "Around the Green": 0.100,
            "Scoring": 0.105,
            "Course Management": 0.057,
        },
        "metricWeights": {
            "Driving Performance": {
                "Driving Distance": _w(0.061),
                "Driving Accuracy": _w(0.410),
                "SG OTT": _w(0.529),
            },
            "Approach - Short (<100)": {
                "Approach <100 GIR": _w(0.12),
                "Approach <100 SG": _w(0.34),
                "Approach <100 Prox": _w(0.54),
            },
            "Approach - Mid (100-150)": {
                "Approach <150 FW GIR": _w(0.10),
                "Approach <150 FW SG": _w(0.30),
                "Approach <150 FW Prox": _w(0.60),
                "Approach <150 Rough GIR": _w(0.10),
                "Approach <150 Rough SG": _w(0.30),
                "Approach <150 Rough Prox": _w(0.60),
            },
            "Approach - Long (150-200)": {
                "Approach <200 FW GIR": _w(0.09),
                "Approach <200 FW SG": _w(0.28),
                "Approach <200 FW Prox": _w(0.63),
                "Approach >150 Rough GIR": _w(0.09),
                "Approach >150 Rough SG": _w(0.28),
                "Approach >150 Rough Prox": _w(0.63),
            },
            "Approach - Very Long (>200)": {
                "Approach >200 FW GIR": _w(0.09),
                "Approach >200 FW SG": _w(0.24),
                "Approach >200 FW Prox": _w(0.67),
            },
            "Putting": {"SG Putting": _w(1.0)},
            "Around the Green": {"SG Around Green": _w(1.0)},
            "Scoring": {
                "SG T2G": _w(0.19),
                "Scoring Average": _w(0.11),
                "Birdie Chances Created": _w(0.10),
                "Scoring: Approach <100 SG": _w(0.15),
                "Scoring: Approach <150 FW SG": _w(0.15),
                "Scoring: Approach <150 Rough SG": _w(0.15),
                "Scoring: Approach <200 FW SG": _w(0.07),
                "Scoring: Approach >200 FW SG": _w(0.03),
                "Scoring: Approach >150 Rough SG": _w(0.05),
            },
            "Course Management": {
                "Scrambling": _w(0.12),
                "Great Shots": _w(0.08),
                "Poor Shot Avoidance": _w(0.08),
                "Course Management: Approach <100 Prox": _w(0.12),
                "Course Management: Approach <150 FW Prox": _w(0.12),
                "Course Management: Approach <150 Rough Prox": _w(0.16),
                "Course Management: Approach >150 Rough Prox": _w(0.18),
                "Course Management: Approach <200 FW Prox": _w(0.11),
                "Course Management: Approach >200 FW Prox": _w(0.03),
            },
        },
    },
}

VENUE_TEMPLATES: dict[str, dict] = {
    "PEBBLE_BEACH_PRO_AM": {
        "name": "PEBBLE_BEACH_PRO_AM",
        "venueId": "pebble_beach",
        "eventId": "5",
        "archetype": "TECHNICAL",
        "description": "AT&T Pebble Beach Pro-Am 事前ブレンド（TECHNICAL 60/40）、コース調整済み",
        "groupWeights": {
            "Driving Performance": 0.1093,
            "Approach - Short (<100)": 0.1273,
            "Approach - Mid (100-150)": 0.1591,
            "Approach - Long (150-200)": 0.1437,
            "Approach - Very Long (>200)": 0.0318,
            "Putting": 0.1059,
            "Around the Green": 0.0999,
            "Scoring": 0.1622,
            "Course Management": 0.0607,
        },
        "metricWeights": {
            "Driving Performance": {
                "Driving Distance": _w(0.1522),
                "Driving Accuracy": _w(0.3831),
                "SG OTT": _w(0.4646),
            },
            "Approach - Short (<100)": {
                "Approach <100 GIR": _w(0.0900),
                "Approach <100 SG": _w(0.3200),
                "Approach <100 Prox": _w(0.5900),
            },
            "Approach - Mid (100-150)": {
                "Approach <150 FW GIR": _w(0.0450),
                "Approach <150 FW SG": _w(0.1450),
                "Approach <150 FW Prox": _w(0.3100),
                "Approach <150 Rough GIR": _w(0.0450),
                "Approach <150 Rough SG": _w(0.1450),
                "Approach <150 Rough Prox": _w(0.3100),
            },
            "Approach - Long (150-200)": {
                "Approach <200 FW GIR": _w(0.0400),
                "Approach <200 FW SG": _w(0.1350),
                "Approach <200 FW Prox": _w(0.3250),
                "Approach >150 Rough GIR": _w(0.0400),
                "Approach >150 Rough SG": _w(0.1350),
                "Approach >150 Rough Prox": _w(0.3250),
            },
            "Approach - Very Long (>200)": {
                "Approach >200 FW GIR": _w(0.0800),
                "Approach >200 FW SG": _w(0.2200),
                "Approach >200 FW Prox": _w(0.7000),
            },
            "Putting": {"SG Putting": _w(1.0)},
            "Around the Green": {"SG Around Green": _w(1.0)},
            "Scoring": {
                "SG T2G": _w(0.2058),
                "Scoring Average": _w(0.2135),
                "Birdie Chances Created": _w(0.0434),
                "Scoring: Approach <100 SG": _w(0.0612),
                "Scoring: Approach <150 FW SG": _w(0.0880),
                "Scoring: Approach <150 Rough SG": _w(0.0880),
                "Scoring: Approach <200 FW SG": _w(0.1546),
                "Scoring: Approach >200 FW SG": _w(0.0727),
                "Scoring: Approach >150 Rough SG": _w(0.0727),
            },
            "Course Management": {
                "Scrambling": _w(0.2959),
                "Great Shots": _w(0.1177),
                "Poor Shot Avoidance": _w(-0.1544),
                "Course Management: Approach <100 Prox": _w(0.0492),
                "Course Management: Approach <150 FW Prox": _w(0.0708),
                "Course Management: Approach <150 Rough Prox": _w(0.0708),
                "Course Management: Approach >150 Rough Prox": _w(0.0585),
                "Course Management: Approach <200 FW Prox": _w(0.1243),
                "Course Management: Approach >200 FW Prox": _w(0.0585),
            },
        },
    },
    "WAIALAE_COUNTRY_CLUB": {
        "name": "WAIALAE_COUNTRY_CLUB",
        "venueId": "waialae",
        "eventId": "6",
        "description": "Sony Open 最適化済み（相関 0.4896, Top-20 6.4%, Top-20重み付き 7.3%）",
        "groupWeights": {
            "Driving Performance": 0.1422,
            "Approach - Short (<100)": 0.1422,
            "Approach - Mid (100-150)": 0.1585,
            "Approach - Long (150-200)": 0.1471,
            "Approach - Very Long (>200)": 0.0294,
            "Putting": 0.1402,
            "Around the Green": 0.0785,
            "Scoring": 0.1079,
            "Course Management": 0.0540,
        },
        "metricWeights": {
            "Driving Performance": {
                "Driving Distance": _w(0.4439),
                "Driving Accuracy": _w(0.1045),
                "SG OTT": _w(0.4516),
            },
            "Approach - Short (<100)": {
                "Approach <100 GIR": _w(0.1270),
                "Approach <100 SG": _w(0.3439),
                "Approach <100 Prox": _w(-0.5290),
            },
            "Approach - Mid (100-150)": {
                "Approach <150 FW GIR": _w(0.0610),
                "Approach <150 FW SG": _w(0.1647),
                "Approach <150 FW Prox": _w(-0.3033),
                "Approach <150 Rough GIR": _w(0.0637),
                "Approach <150 Rough SG": _w(0.1513),
                "Approach <150 Rough Prox": _w(-0.2561),
            },
            "Approach - Long (150-200)": {
                "Approach <200 FW GIR": _w(0.0589),
                "Approach <200 FW SG": _w(0.1511),
                "Approach <200 FW Prox": _w(-0.2932),
                "Approach >150 Rough GIR": _w(0.0537),
                "Approach >150 Rough SG": _w(0.1428),
                "Approach >150 Rough Prox": _w(-0.3003),
            },
            "Approach - Very Long (>200)": {
                "Approach >200 FW GIR": _w(0.0898),
                "Approach >200 FW SG": _w(0.2624),
                "Approach >200 FW Prox": _w(-0.6478),
            },
            "Putting": {"SG Putting": _w(1.0)},
            "Around the Green": {"SG Around Green": _w(1.0)},
            "Scoring": {
                "SG T2G": _w(0.1948),
                "Scoring Average": _w(-0.0947),
                "Birdie Chances Created": _w(0.0988),
                "Scoring: Approach <100 SG": _w(0.1640),
                "Scoring: Approach <150 FW SG": _w(0.1484),
                "Scoring: Approach <150 Rough SG": _w(0.1440),
                "Scoring: Approach <200 FW SG": _w(0.0519),
                "Scoring: Approach >200 FW SG": _w(0.0001),
                "Scoring: Approach >150 Rough SG": _w(0.1034),
            },
            "Course Management": {
                "Scrambling": _w(0.1150),
                "Great Shots": _w(0.0902),
                "Poor Shot Avoidance": _w(-0.0743),
                "Course Management: Approach <100 Prox": _w(-0.1078),
                "Course Management: Approach <150 FW Prox": _w(-0.1056),
                "Course Management: Approach <150 Rough Prox": _w(-0.1643),
                "Course Management: Approach >150 Rough Prox": _w(-0.1759),
                "Course Management: Approach <200 FW Prox": _w(-0.1220),
                "Course Management: Approach >200 FW Prox": _w(-0.0448),
            },
        },
    },
    "TPC_SCOTTSDALE": {
        "name": "TPC_SCOTTSDALE",
        "venueId": "tpc_scottsdale",
        "eventId": "3",
        "description": "WM Phoenix Open 最適化済み（相関 0.7135, Top-20 20.9%, Top-20重み付き 22.1%）",
        "groupWeights": {
            "Driving Performance": 0.1335,
            "Approach - Short (<100)": 0.0984,
            "Approach - Mid (100-150)": 0.1848,
            "Approach - Long (150-200)": 0.1540,
            "Approach - Very Long (>200)": 0.0308,
            "Putting": 0.1469,
            "Around the Green": 0.0821,
            "Scoring": 0.1130,
            "Course Management": 0.0565,
        },
        "metricWeights": {
            "Driving Performance": {
                "Driving Distance": _w(0.4067),
                "Driving Accuracy": _w(0.1187),
                "SG OTT": _w(0.4747),
            },
            "Approach - Short (<100)": {
                "Approach <100 GIR": _w(0.1555),
                "Approach <100 SG": _w(0.3482),
                "Approach <100 Prox": _w(-0.4962),
            },
            "Approach - Mid (100-150)": {
                "Approach <150 FW GIR": _w(0.0639),
                "Approach <150 FW SG": _w(0.1652),
                "Approach <150 FW Prox": _w(-0.3060),
                "Approach <150 Rough GIR": _w(0.0512),
                "Approach <150 Rough SG": _w(0.1742),
                "Approach <150 Rough Prox": _w(-0.2395),
            },
            "Approach - Long (150-200)": {
                "Approach <200 FW GIR": _w(0.0518),
                "Approach <200 FW SG": _w(0.1530),
                "Approach <200 FW Prox": _w(-0.3222),
                "Approach >150 Rough GIR": _w(0.0553),
                "Approach >150 Rough SG": _w(0.1509),
                "Approach >150 Rough Prox": _w(-0.2669),
            },
            "Approach - Very Long (>200)": {
                "Approach >200 FW GIR": _w(0.0858),
                "Approach >200 FW SG": _w(0.2281),
                "Approach >200 FW Prox": _w(-0.6861),
            },
            "Putting": {"SG Putting": _w(1.0)},
            "Around the Green": {"SG Around Green": _w(1.0)},
            "Scoring": {
                "SG T2G": _w(0.1970),
                "Scoring Average": _w(0.1100),
                "Birdie Chances Created": _w(0.0981),
                "Scoring: Approach <100 SG": _w(0.1353),
                "Scoring: Approach <150 FW SG": _w(0.1596),
                "Scoring: Approach <150 Rough SG": _w(0.1476),
                "Scoring: Approach <200 FW SG": _w(0.0464),
                "Scoring: Approach >200 FW SG": _w(0.0001),
                "Scoring: Approach >150 Rough SG": _w(0.1059),
            },
            "Course Management": {
                "Scrambling": _w(0.1348),
                "Great Shots": _w(0.0896),
                "Poor Shot Avoidance": _w(0.1718),
                "Course Management: Approach <100 Prox": _w(-0.0880),
                "Course Management: Approach <150 FW Prox": _w(-0.0991),
                "Course Management: Approach <150 Rough Prox": _w(-0.1436),
                "Course Management: Approach >150 Rough Prox": _w(-0.1793),
                "Course Management: Approach <200 FW Prox": _w(-0.1277),
                "Course Management: Approach >200 FW Prox": _w(-0.0460),
            },
        },
    },
}

# 該当テンプレートがない場合の既定類型
DEFAULT_ARCHETYPE = "BALANCED"
