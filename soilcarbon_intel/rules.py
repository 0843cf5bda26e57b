"""
Fixed extraction schema and workflow defaults.

The CSV header order is part of the export contract; do not reorder.
"""

CSV_HEADERS = [
    "Year", "Authors", "Title", "Journal", "Open_Access",
    "Scale", "Continent", "Country", "Longitude", "Latitude",
    "Sampling_Year", "Sampling_Design", "Sampling_Depth", "Soil_Status", "LULC",
    "Spectrometer", "Spectral_Region", "Spectral_Range_Val", "Spectral_Library",
    "Spectral_Preprocessing", "Transfer_Learning",
    "Target_Property", "No_Samples_Cal", "No_Samples_Val", "Split_Method",
    "Variable_Selection", "Calibration_Model", "Auxiliary_Predictors",
    "Validation_Type", "R2", "RMSE", "RPIQ", "r",
]

COORDINATE_FIELDS = ("Longitude", "Latitude")

# Closed vocabularies enforced through the LLM response schema.
ENUM_VALUES = {
    "Open_Access": ["Yes", "No"],
    "Scale": ["Field", "Regional", "National", "Continental", "Global"],
    "Soil_Status": ["Dry-ground", "In-situ", "On-the-go"],
    "Spectral_Region": ["VNIR", "MIR", "VNIR-MIR"],
    "Spectral_Library": ["Y", "N"],
}

INTEGER_FIELDS = ("Year", "No_Samples_Cal", "No_Samples_Val")
NUMBER_FIELDS = ("R2", "RMSE", "RPIQ", "r")
REQUIRED_FIELDS = ("Title", "Year")

DEFAULT_QUERY = (
    'TS=(soil) AND TS=(carbon) AND TS=("Visible near infrared" OR '
    '"Visible-near infrared" OR VNIR OR "Near-infrared" OR "Mid-infrared" '
    "OR vis-NIR OR MIR)"
)
DEFAULT_MODEL = "gemini-2.5-flash"
SIMULATED_PAPER_COUNT = 3
SIMULATED_YEAR = 2025

EXPORT_FILENAME = "soil_carbon_spectroscopy_2025.csv"
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
COORDINATE_PRECISION = 6
