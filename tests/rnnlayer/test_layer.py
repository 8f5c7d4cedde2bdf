import pytest
import numpy as np

from rnnlayer import (
    Layer, FeedforwardLayer, RecurrentLayer, FeedforwardPolicy, RecurrentPolicy,
    DimensionMismatch, AllocationFailure, Result, reporter,
    WEIGHT_PLANE, BIAS_PLANE, ACTIVATION_PLANE
)
from rnnlayer.errors import report_alloc_error

DIMS = [(3, 2, 1), (4, 6, 3), (1, 1, 1), (5, 2, 4)]

# --- Kurulum Testleri ---

@pytest.mark.parametrize("policy", [FeedforwardPolicy, RecurrentPolicy])
@pytest.mark.parametrize("nodes, inputs, depth", DIMS)
def test_construction_is_zeroed(policy, nodes, inputs, depth):
    """Kurulumdan sonra çıktılar, hatalar ve tüm tensör sıfır olmalı."""
    layer = Layer(nodes, inputs, depth, policy=policy)

    assert layer.get_outputs().shape == (nodes,)
    assert np.all(layer.get_outputs() == 0)
    assert np.all(layer.get_errors() == 0)
    assert layer.get_wba().shape == (nodes, max(nodes, inputs), depth, 3)
    assert np.all(layer.get_wba() == 0)
    for d in range(depth):
        for i in range(inputs):
            for n in range(nodes):
                assert layer.wba(n, i, d, WEIGHT_PLANE) == 0


def test_identical_dimensions_give_identical_tensors():
    a = Layer(4, 3, 2, policy="recurrent")
    b = Layer(4, 3, 2, policy="recurrent")
    assert a.get_wba().shape == b.get_wba().shape
    assert np.array_equal(a.get_wba(), b.get_wba())


def test_dimensions_are_read_only():
    layer = Layer(3, 2, 1)
    assert (layer.num_nodes, layer.num_inputs, layer.depth) == (3, 2, 1)
    with pytest.raises(AttributeError):
        layer.num_nodes = 7


def test_negative_dimension_is_rejected():
    with pytest.raises(ValueError):
        Layer(3, -1, 1)


@pytest.mark.parametrize("dims", [(2.7, 2, 1), (3, 2.0, 1), (3, 2, "1")])
def test_non_integer_dimension_is_rejected(dims):
    """Kesirli boyutlar sessizce kesilmemeli."""
    with pytest.raises(TypeError):
        Layer(*dims)


def test_numpy_integer_dimensions_are_accepted():
    layer = Layer(np.int64(3), np.int32(2), np.uint8(2))
    assert (layer.num_nodes, layer.num_inputs, layer.depth) == (3, 2, 2)
    assert type(layer.num_nodes) is int


def test_allocation_failure_leaves_no_layer(monkeypatch):
    """wba ayrılamazsa katman oluşmamalı ve hata raporlanmalı."""
    from rnnlayer.policies import base

    def failing_allocate(*args, **kwargs):
        return Result.failure(report_alloc_error(kwargs.get("name", "wba"), "out of memory"))

    monkeypatch.setattr(base.Tensor4, "allocate", failing_allocate)
    reporter.clear()
    layer = None
    with pytest.raises(AllocationFailure):
        layer = Layer(3, 2, 1)
    assert layer is None
    assert reporter.records[-1].kind == "alloc"
    assert reporter.records[-1].names == ("wba",)

# --- Ağırlık Başlatma Testleri ---

@pytest.mark.parametrize("nodes, inputs, depth", DIMS)
def test_initialize_weights_stays_in_range(nodes, inputs, depth):
    layer = Layer(nodes, inputs, depth, policy="recurrent")
    layer.initialize_weights(-0.5, 0.25, rng=np.random.default_rng(0))

    wba = layer.get_wba()
    region = wba[:, :inputs, :, WEIGHT_PLANE]
    assert np.all(region >= -0.5) and np.all(region <= 0.25)
    # Bias ve aktivasyon düzlemlerine dokunulmamalı
    assert np.all(wba[:, :, :, BIAS_PLANE] == 0)
    assert np.all(wba[:, :, :, ACTIVATION_PLANE] == 0)


def test_initialize_weights_only_touches_input_sources():
    """Kaynak ekseni max(inputs, nodes) genişliğinde; yalnızca ilk `inputs` kaynağı başlatılır."""
    layer = Layer(4, 2, 2, policy="recurrent")
    layer.initialize_weights(1.0, 2.0)
    wba = layer.get_wba()
    assert np.all(wba[:, :2, :, WEIGHT_PLANE] >= 1.0)
    assert np.all(wba[:, 2:, :, WEIGHT_PLANE] == 0)


def test_initialize_weights_mean_with_fixed_seed():
    rng = np.random.default_rng(1234)
    layer = Layer(40, 30, 5, policy="recurrent")
    means = []
    for _ in range(20):
        layer.initialize_weights(0.0, 1.0, rng=rng)
        means.append(layer.get_wba()[:, :30, :, WEIGHT_PLANE].mean())
    assert abs(np.mean(means) - 0.5) < 0.01


def test_initialize_weights_with_equal_bounds():
    layer = Layer(2, 2, 1)
    layer.initialize_weights(0.3, 0.3)
    assert np.allclose(layer.get_wba()[:, :, 0, WEIGHT_PLANE], 0.3)


@pytest.mark.parametrize("nodes, inputs, depth", [(3, 0, 2), (3, 2, 0), (0, 2, 1)])
def test_initialize_weights_on_empty_region(nodes, inputs, depth):
    layer = Layer(nodes, inputs, depth)
    layer.initialize_weights(-1.0, 1.0)
    assert np.all(layer.get_wba() == 0)


def test_initialize_weights_rejects_inverted_range():
    layer = Layer(3, 2, 1)
    with pytest.raises(ValueError):
        layer.initialize_weights(1.0, -1.0)
    assert np.all(layer.get_wba() == 0)


def test_three_node_two_input_scenario():
    layer = Layer(3, 2, 1)
    layer.initialize_weights(-1.0, 1.0)
    for n in range(3):
        for i in range(2):
            assert -1.0 <= layer.wba(n, i, 0, WEIGHT_PLANE) <= 1.0
    assert layer.get_outputs().tolist() == [0, 0, 0]
    assert layer.get_errors().tolist() == [0, 0, 0]

# --- Erişim Testleri ---

def test_views_are_read_only():
    layer = Layer(3, 2, 1)
    with pytest.raises(ValueError):
        layer.get_wba()[0, 0, 0, 0] = 1.0
    with pytest.raises(ValueError):
        layer.get_outputs()[0] = 1.0
    with pytest.raises(ValueError):
        layer.get_errors()[0] = 1.0
    with pytest.raises(ValueError):
        layer.weights(0)[0, 0] = 1.0


def test_wba_view_reflects_later_writes():
    layer = Layer(3, 2, 1)
    view = layer.get_wba()
    layer.initialize_weights(5.0, 6.0)
    assert np.all(view[:, :2, 0, WEIGHT_PLANE] >= 5.0)


@pytest.mark.parametrize("coords", [
    (3, 0, 0, 0), (0, 3, 0, 0), (0, 0, 1, 0), (0, 0, 0, 3), (-1, 0, 0, 0), (0.5, 0, 0, 0), (0, 1.0, 0, 0)
])
def test_invalid_coordinate_is_reported(coords):
    layer = Layer(3, 2, 1)
    reporter.clear()
    with pytest.raises(DimensionMismatch):
        layer.wba(*coords)
    assert len(reporter.records) == 1
    assert reporter.records[-1].kind == "dim"


def test_forward_writes_outputs():
    layer = FeedforwardLayer(2, 3, activation="identity")
    layer.initialize_weights(1.0, 1.0)
    layer.set_bias(0, [0.5, -0.5])

    out = layer.forward([1.0, 2.0, 3.0])

    assert np.allclose(out, [6.5, 5.5])
    assert np.allclose(layer.get_outputs(), [6.5, 5.5])
    assert np.allclose(layer.activation(0), [6.5, 5.5])
    assert np.allclose(layer.bias(0), [0.5, -0.5])


def test_forward_rejects_wrong_input_length_before_writing():
    layer = FeedforwardLayer(2, 3)
    with pytest.raises(DimensionMismatch):
        layer.forward([1.0, 2.0])
    assert np.all(layer.get_outputs() == 0)
    assert np.all(layer.get_wba() == 0)


def test_backward_writes_errors():
    layer = FeedforwardLayer(2, 3)
    layer.forward([0.0, 0.0, 0.0])
    input_errors = layer.backward([1.0, -2.0])

    # sigmoid'in 0'daki türevi 0.25
    assert np.allclose(layer.get_errors(), [0.25, -0.5])
    assert input_errors.shape == (3,)


def test_recurrent_layer_defaults():
    layer = RecurrentLayer(4, 3)
    assert layer.policy_name == "recurrent"
    assert layer.activation_name == "tanh"
    assert layer.depth == 2
    layer.forward(np.ones(3))
    assert layer.steps == 1
    layer.reset_state()
    assert layer.steps == 0
    assert np.all(layer.get_outputs() == 0)
