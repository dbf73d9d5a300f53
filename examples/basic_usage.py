"""Basic usage example for bullseye detection."""

import sys

from bullseye.detection import KeypointSelectorBullseye
from bullseye.synthetic import render_bullseye
from bullseye.utils.io_handler import load_image, save_image
from bullseye.utils.visualization import draw_keypoints, make_flag_image


def main():
    """Detect markers in an image, or in a rendered one when no path is given."""
    if len(sys.argv) > 1:
        image = load_image(sys.argv[1])
        if image is None:
            print(f"Error: Could not load image from {sys.argv[1]}")
            return
    else:
        print("No image given, rendering a marker at row 59, column 54...")
        image = render_bullseye((120, 110), (59, 54))

    selector = KeypointSelectorBullseye(10, 15, 5)
    selector.set_image(image)

    print("Detecting markers...")
    keypoints = selector.get_keypoints()
    refined = selector.get_keypoints_general_position()
    print(f"Detected {len(keypoints)} marker(s)")
    for kp, gp in zip(keypoints, refined):
        print(f"  row {kp.row}, column {kp.column} "
              f"(sub-pixel {gp.row:.2f}, {gp.column:.2f}, score {kp.score:.3f})")

    save_image(make_flag_image(image.shape, keypoints), "output/flag.pgm")
    save_image(draw_keypoints(image, refined), "output/detections.png")
    print("Results saved to output/")


if __name__ == "__main__":
    main()
