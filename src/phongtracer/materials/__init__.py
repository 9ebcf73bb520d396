"""Surface materials.

Phong: ambient + diffuse + specular reflection with a base color. Defaults
are color white, ambient 0.1, diffuse 0.9, specular 0.9, shininess 200.
"""

from .phong import Material, lighting

__all__ = ["Material", "lighting"]
