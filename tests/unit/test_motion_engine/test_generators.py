"""
Unit tests for motion_engine.generators module.
"""

import logging
import random

import pytest

from kenburns.motion_engine.easing import accelerate_decelerate, bounce, easing_name, linear
from kenburns.motion_engine.errors import InvalidArgumentError
from kenburns.motion_engine.generators import (
    GENERATOR_LIBRARY,
    CornerTransitionGenerator,
    FullToRandomTransitionGenerator,
    RandomTransitionGenerator,
    create_generator,
    random_crop,
)
from kenburns.motion_engine.geometry import (
    Rect,
    have_same_aspect_ratio,
    letterbox_rect,
    max_viewport_fit_rect,
)


class TestRandomCrop:
    """Tests for random_crop."""

    def test_inside_drawable_with_viewport_shape(self, landscape_image, hd_viewport, rng):
        """Test crops stay inside the image and keep the viewport's shape."""
        for _ in range(200):
            crop = random_crop(landscape_image, hd_viewport, 0.75, rng)
            assert landscape_image.contains(crop)
            assert have_same_aspect_ratio(crop, hd_viewport)

    def test_size_range(self, landscape_image, hd_viewport, rng):
        """Test crop width is between min_factor and 1 of the fit rect."""
        fit = max_viewport_fit_rect(landscape_image, hd_viewport)
        for _ in range(200):
            crop = random_crop(landscape_image, hd_viewport, 0.75, rng)
            assert 0.75 * fit.width - 1e-6 <= crop.width <= fit.width + 1e-6

    def test_offset_drawable(self, hd_viewport, rng):
        """Test crops follow a drawable that does not start at the origin."""
        drawable = Rect(500, 300, 2500, 1800)
        for _ in range(50):
            assert drawable.contains(random_crop(drawable, hd_viewport, 0.5, rng))


class TestRandomTransitionGenerator:
    """Tests for RandomTransitionGenerator."""

    def test_containment_over_many_trials(self, rng):
        """Test both rects stay inside random drawables for random viewports."""
        for _ in range(1000):
            drawable = Rect.from_size(rng.uniform(100, 5000), rng.uniform(100, 5000))
            viewport = Rect.from_size(rng.uniform(100, 3000), rng.uniform(100, 3000))
            generator = RandomTransitionGenerator(rng=rng)
            transition = generator.generate_next_transition(drawable, viewport)
            assert drawable.contains(transition.source)
            assert drawable.contains(transition.destination)
            assert have_same_aspect_ratio(transition.destination, viewport)

    def test_chains_from_previous_destination(self, landscape_image, hd_viewport, rng):
        """Test each transition starts where the previous one ended."""
        generator = RandomTransitionGenerator(rng=rng)
        previous = generator.generate_next_transition(landscape_image, hd_viewport)
        for _ in range(20):
            current = generator.generate_next_transition(landscape_image, hd_viewport)
            assert current.source == previous.destination
            previous = current
        assert generator.last_transition is previous

    def test_new_drawable_restarts_chain(self, landscape_image, portrait_image, hd_viewport, rng):
        """Test a drawable change picks a fresh source inside the new image."""
        generator = RandomTransitionGenerator(rng=rng)
        generator.generate_next_transition(landscape_image, hd_viewport)
        transition = generator.generate_next_transition(portrait_image, hd_viewport)
        assert portrait_image.contains(transition.source)

    def test_viewport_shape_change_restarts_chain(self, landscape_image, hd_viewport, square_viewport, rng):
        """Test a viewport aspect ratio change picks a fresh source of the new shape."""
        generator = RandomTransitionGenerator(rng=rng)
        first = generator.generate_next_transition(landscape_image, hd_viewport)
        second = generator.generate_next_transition(landscape_image, square_viewport)
        assert second.source != first.destination
        assert have_same_aspect_ratio(second.source, square_viewport)

    def test_is_cropping(self):
        """Test random crops are drawn clipped."""
        assert RandomTransitionGenerator().is_cropping_image() is True

    def test_defaults_from_settings(self, landscape_image, hd_viewport, rng):
        """Test default duration and random easing."""
        generator = RandomTransitionGenerator(rng=rng)
        transition = generator.generate_next_transition(landscape_image, hd_viewport)
        assert transition.duration_ms == 10000
        assert easing_name(transition.easing) == "random"

    def test_duration_from_environment(self, monkeypatch, landscape_image, hd_viewport):
        """Test the default duration can be overridden via environment."""
        monkeypatch.setenv("KENBURNS_TRANSITION_DURATION_MS", "2500")
        generator = RandomTransitionGenerator()
        assert generator.generate_next_transition(landscape_image, hd_viewport).duration_ms == 2500

    def test_setters(self, landscape_image, hd_viewport, rng):
        """Test duration and easing setters apply to the next transition."""
        generator = RandomTransitionGenerator(rng=rng)
        generator.set_transition_duration(3000)
        generator.set_transition_interpolator(linear)
        transition = generator.generate_next_transition(landscape_image, hd_viewport)
        assert transition.duration_ms == 3000
        assert transition.easing is linear

    def test_setters_validate(self):
        """Test invalid duration and easing are rejected."""
        generator = RandomTransitionGenerator()
        with pytest.raises(InvalidArgumentError):
            generator.set_transition_duration(0)
        with pytest.raises(InvalidArgumentError):
            generator.set_transition_interpolator(None)

    def test_invalid_constructor_arguments(self):
        """Test bad durations and crop factors are rejected."""
        with pytest.raises(InvalidArgumentError):
            RandomTransitionGenerator(duration_ms=-1)
        with pytest.raises(InvalidArgumentError):
            RandomTransitionGenerator(min_rect_factor=0)
        with pytest.raises(InvalidArgumentError):
            RandomTransitionGenerator(min_rect_factor=1.5)

    def test_seeded_output_is_reproducible(self, landscape_image, hd_viewport):
        """Test two generators with the same seed produce the same rects."""
        first = RandomTransitionGenerator(easing=linear, rng=random.Random(7))
        second = RandomTransitionGenerator(easing=linear, rng=random.Random(7))
        for _ in range(5):
            a = first.generate_next_transition(landscape_image, hd_viewport)
            b = second.generate_next_transition(landscape_image, hd_viewport)
            assert (a.source, a.destination) == (b.source, b.destination)


class TestFullToRandomTransitionGenerator:
    """Tests for FullToRandomTransitionGenerator."""

    def test_source_is_letterbox(self, landscape_image, hd_viewport, rng):
        """Test every transition starts from the whole image."""
        generator = FullToRandomTransitionGenerator(rng=rng)
        for _ in range(10):
            transition = generator.generate_next_transition(landscape_image, hd_viewport)
            assert transition.source == letterbox_rect(landscape_image, hd_viewport)

    def test_destination_is_near_full_crop(self, landscape_image, hd_viewport, rng):
        """Test destinations are 95-100% crops inside the image."""
        fit = max_viewport_fit_rect(landscape_image, hd_viewport)
        generator = FullToRandomTransitionGenerator(rng=rng)
        for _ in range(100):
            destination = generator.generate_next_transition(landscape_image, hd_viewport).destination
            assert landscape_image.contains(destination)
            assert destination.width >= 0.95 * fit.width - 1e-6

    def test_not_cropping(self):
        """Test the whole image is drawn."""
        assert FullToRandomTransitionGenerator().is_cropping_image() is False

    def test_default_easing(self, landscape_image, hd_viewport, rng):
        """Test the default easing is accelerate_decelerate."""
        generator = FullToRandomTransitionGenerator(rng=rng)
        transition = generator.generate_next_transition(landscape_image, hd_viewport)
        assert transition.easing is accelerate_decelerate


class TestCornerTransitionGenerator:
    """Tests for CornerTransitionGenerator."""

    @pytest.fixture
    def corners(self):
        # 4000x3000 image, 16:9 viewport, scale 0.5 -> 2000x1125 rects
        return {
            "top_left": Rect(0, 0, 2000, 1125),
            "top_right": Rect(2000, 0, 4000, 1125),
            "bottom_right": Rect(2000, 1875, 4000, 3000),
            "bottom_left": Rect(0, 1875, 2000, 3000),
        }

    def test_tour_order(self, landscape_image, hd_viewport, corners):
        """Test five transitions visit the corners clockwise and wrap."""
        generator = CornerTransitionGenerator()
        expected = [
            ("top_left", "top_right"),
            ("top_right", "bottom_right"),
            ("bottom_right", "bottom_left"),
            ("bottom_left", "top_left"),
            ("top_left", "top_right"),
        ]
        for source, destination in expected:
            transition = generator.generate_next_transition(landscape_image, hd_viewport)
            assert transition.source.to_dict() == pytest.approx(corners[source].to_dict())
            assert transition.destination.to_dict() == pytest.approx(corners[destination].to_dict())

    def test_step_wraps(self, landscape_image, hd_viewport):
        """Test the step counter wraps at four."""
        generator = CornerTransitionGenerator()
        for _ in range(4):
            generator.generate_next_transition(landscape_image, hd_viewport)
        assert generator.current_step == 0

    def test_start_step_and_reset(self, landscape_image, hd_viewport, corners):
        """Test starting mid-tour and resetting back."""
        generator = CornerTransitionGenerator(start_step=2)
        transition = generator.generate_next_transition(landscape_image, hd_viewport)
        assert transition.source.to_dict() == pytest.approx(corners["bottom_right"].to_dict())
        generator.reset()
        assert generator.current_step == 0

    def test_deterministic(self, landscape_image, hd_viewport):
        """Test two generators produce identical tours."""
        first = CornerTransitionGenerator()
        second = CornerTransitionGenerator()
        for _ in range(6):
            a = first.generate_next_transition(landscape_image, hd_viewport)
            b = second.generate_next_transition(landscape_image, hd_viewport)
            assert (a.source, a.destination) == (b.source, b.destination)

    def test_defaults(self, landscape_image, hd_viewport):
        """Test default scale, easing and cropping flag."""
        generator = CornerTransitionGenerator()
        assert generator.scale == 0.5
        assert generator.is_cropping_image() is False
        assert generator.generate_next_transition(landscape_image, hd_viewport).easing is bounce

    def test_scale_validation(self):
        """Test the corner scale must be in (0, 1]."""
        generator = CornerTransitionGenerator()
        with pytest.raises(InvalidArgumentError):
            generator.scale = 0
        with pytest.raises(InvalidArgumentError):
            CornerTransitionGenerator(scale=1.5)

    def test_full_scale_corners_coincide_on_fit(self, hd_viewport):
        """Test scale 1.0 on a viewport-shaped image gives the whole image each time."""
        drawable = Rect.from_size(1920, 1080)
        generator = CornerTransitionGenerator(scale=1.0)
        transition = generator.generate_next_transition(drawable, hd_viewport)
        assert transition.source.width == pytest.approx(1920)
        assert transition.destination.left == pytest.approx(0)


class TestAspectRatioTolerance:
    """Tests for chaining under the configured aspect ratio tolerance."""

    def test_tight_tolerance_restarts_chain_on_small_viewport_change(
        self, monkeypatch, landscape_image, hd_viewport, rng
    ):
        """Test a slightly reshaped viewport picks a fresh source instead of failing."""
        monkeypatch.setenv("KENBURNS_ASPECT_RATIO_TOLERANCE", "0.001")
        generator = RandomTransitionGenerator(rng=rng)
        first = generator.generate_next_transition(landscape_image, hd_viewport)
        reshaped = Rect.from_size(1925, 1080)
        second = generator.generate_next_transition(landscape_image, reshaped)
        assert second.source != first.destination
        assert have_same_aspect_ratio(second.source, reshaped, tolerance=0.001)

    def test_tight_tolerance_still_chains_unchanged_viewport(
        self, monkeypatch, landscape_image, hd_viewport, rng
    ):
        """Test float noise alone does not break the chain."""
        monkeypatch.setenv("KENBURNS_ASPECT_RATIO_TOLERANCE", "0.000001")
        generator = RandomTransitionGenerator(rng=rng)
        previous = generator.generate_next_transition(landscape_image, hd_viewport)
        for _ in range(20):
            current = generator.generate_next_transition(landscape_image, hd_viewport)
            assert current.source == previous.destination
            previous = current

    def test_default_tolerance_chains_across_small_viewport_change(
        self, landscape_image, hd_viewport, rng
    ):
        """Test a change within the default tolerance keeps chaining."""
        generator = RandomTransitionGenerator(rng=rng)
        first = generator.generate_next_transition(landscape_image, hd_viewport)
        second = generator.generate_next_transition(landscape_image, Rect.from_size(1925, 1080))
        assert second.source == first.destination


class TestDegenerateBounds:
    """Tests for zero-area drawables and viewports."""

    @pytest.mark.parametrize("name", list(GENERATOR_LIBRARY))
    def test_zero_area_drawable_holds_still(self, name, hd_viewport):
        """Test generators emit a still transition instead of failing."""
        drawable = Rect.from_size(0, 100)
        transition = create_generator(name).generate_next_transition(drawable, hd_viewport)
        assert transition.source == drawable
        assert transition.destination == drawable

    def test_zero_area_viewport_logs_warning(self, landscape_image, caplog):
        """Test a degenerate viewport is reported."""
        with caplog.at_level(logging.WARNING):
            RandomTransitionGenerator().generate_next_transition(landscape_image, Rect.from_size(0, 0))
        assert "Degenerate bounds" in caplog.text

    def test_chain_recovers_after_degenerate(self, landscape_image, hd_viewport, rng):
        """Test a still transition does not poison the next source."""
        generator = RandomTransitionGenerator(rng=rng)
        generator.generate_next_transition(Rect.from_size(0, 0), hd_viewport)
        transition = generator.generate_next_transition(landscape_image, hd_viewport)
        assert landscape_image.contains(transition.source)
        assert have_same_aspect_ratio(transition.source, hd_viewport)


class TestGeneratorLibrary:
    """Tests for create_generator."""

    def test_create_by_name(self):
        """Test each name builds the matching class."""
        assert isinstance(create_generator("random"), RandomTransitionGenerator)
        assert isinstance(create_generator("full_to_random"), FullToRandomTransitionGenerator)
        assert isinstance(create_generator("corners", scale=0.25), CornerTransitionGenerator)

    def test_unknown_name(self):
        """Test unknown generator names raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            create_generator("zigzag")
