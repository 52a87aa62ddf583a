"""Support files written once per run next to the generated modules."""

from nextclient.typescript.converter import HELPER_FUNCTIONS, TypeConverter

TRANSPORT_INTERFACE = 'IRawClient'

COMMON_SOURCE = f'''\
export interface {TRANSPORT_INTERFACE} {{
    fetch(request: unknown, servicePath: string): Promise<unknown>;
}}
'''


def registry_seed(common_file: str, decode_file: str) -> list[tuple[str, str]]:
    """Registry entries for the symbols the support files define."""
    return [(TRANSPORT_INTERFACE, common_file)] + [
        (name, decode_file) for name in HELPER_FUNCTIONS
    ]


def support_files(
    converter: TypeConverter, common_file: str, decode_file: str
) -> dict[str, str]:
    return {
        common_file: COMMON_SOURCE,
        decode_file: converter.generate_helper_library(),
    }
