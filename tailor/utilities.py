def model_variant(use_slim: bool) -> str:
    return 'slim' if use_slim else 'steve'


def get_dimensions_representation(size) -> str:
    width, height = size
    return f'{width}x{height}'
