"""Selection of the spectral variant from runtime arguments."""

from typing import Optional, Tuple, Union

from torchspectral._basis import Basis, Quadrature
from torchspectral._mesh import Mesh
from torchspectral._variant import SpectralVariant, get_variant


def variant_for_mesh(
    mesh: Mesh,
    dimension: int = 0,
) -> Tuple[SpectralVariant, int]:
    """Strategy and number of points along ``dimension`` of ``mesh``.

    Raises
    ------
    UnsupportedCombinationError
        If the mesh's basis and quadrature tags name no registered variant.
    """
    variant = get_variant(mesh.basis, mesh.quadrature)
    return variant, mesh.extent(dimension)


def resolve_arguments(
    basis_or_mesh: Union[Basis, str, Mesh],
    quadrature: Optional[Union[Quadrature, str]],
    num_points: Optional[int],
    dimension: int,
) -> Tuple[SpectralVariant, int]:
    """Accept either ``(basis, quadrature, num_points)`` or a ``Mesh``."""
    if isinstance(basis_or_mesh, Mesh):
        if quadrature is not None or num_points is not None:
            raise TypeError(
                "quadrature and num_points must not be given with a Mesh"
            )
        return variant_for_mesh(basis_or_mesh, dimension)

    if quadrature is None or num_points is None:
        raise TypeError(
            "basis, quadrature and num_points are required without a Mesh"
        )
    return get_variant(basis_or_mesh, quadrature), num_points
