from typing import Dict, Literal, Tuple, TypedDict

AssetClass = Literal["stocks", "bonds", "etfs", "crypto", "reits", "commodities"]
Horizon = Literal["1year", "3year", "5year", "10year"]

ASSET_CLASSES: Tuple[str, ...] = ("stocks", "bonds", "etfs", "crypto", "reits", "commodities")
CORE_ASSET_CLASSES: Tuple[str, ...] = ("stocks", "bonds", "etfs")
OPTIONAL_ASSET_CLASSES: Tuple[str, ...] = ("crypto", "reits", "commodities")
HORIZONS: Tuple[str, ...] = ("1year", "3year", "5year", "10year")
RISK_ASSESSMENT_FIELDS: Tuple[str, ...] = ("marketVolatility", "liquidityRisk", "inflationProtection")

class _CorePortfolio(TypedDict):
    stocks: float
    bonds: float
    etfs: float

class Portfolio(_CorePortfolio, total=False):
    crypto: float
    reits: float
    commodities: float

class Projection(TypedDict):
    conservative: float
    expected: float
    optimistic: float

class RiskAssessment(TypedDict):
    marketVolatility: str
    liquidityRisk: str
    inflationProtection: str

class _RecommendationBody(TypedDict):
    portfolio: Portfolio
    rationale: Dict[str, str]
    riskScore: int
    diversificationScore: float
    projections: Dict[str, Projection]
    riskAssessment: RiskAssessment

class Recommendation(_RecommendationBody, total=False):
    # Stamped by the service, never by the model.
    timestamp: str
    userInput: str
    isAI: bool
