from be_law.api.routes.citations import citations_bp
from be_law.api.routes.provisions import provisions_bp
from be_law.api.routes.monitoring import monitoring_bp

__all__ = ['citations_bp', 'provisions_bp', 'monitoring_bp']
