from .categories import get_category_config, get_base_size_num, get_size_label, validate_size
from .grading import grade_size, grade_sizes
from .construction import derive_construction_specs, derive_last_specs
from .size_recommendation import recommend_size
from .export import export_graded_csv
