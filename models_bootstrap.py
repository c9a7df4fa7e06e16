# models_bootstrap.py
from staff import models as _staff_models
from venue import models as _venue_models
from assignment import models as _assignment_models
